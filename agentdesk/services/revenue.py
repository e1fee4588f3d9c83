from __future__ import annotations

import threading
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

import pandas as pd


class Window(str, Enum):
    ONE_DAY = "1d"
    SEVEN_DAY = "7d"

    @property
    def span(self) -> timedelta:
        return timedelta(days=1) if self is Window.ONE_DAY else timedelta(days=7)


class Trigger(str, Enum):
    LOW_RPM = "low_rpm"
    LOW_ACCEPT_RATE = "low_accept_rate"
    HIGH_REVISION_COST = "high_revision_cost"


@dataclass
class RevenueSnapshot:
    jobs_per_day: float
    first_pass_yield: float
    sla: float
    ebitda: float
    queue_depth: int
    token_cost_rate: float
    rpm: float
    accept_rate: float
    avg_revision_cost: float
    audio_minutes: float


PLACEHOLDER_SNAPSHOTS = {
    Window.ONE_DAY: RevenueSnapshot(
        jobs_per_day=2.2,
        first_pass_yield=0.74,
        sla=0.95,
        ebitda=22.4,
        queue_depth=5,
        token_cost_rate=0.21,
        rpm=7.2,
        accept_rate=0.71,
        avg_revision_cost=2.8,
        audio_minutes=14,
    ),
    Window.SEVEN_DAY: RevenueSnapshot(
        jobs_per_day=2.6,
        first_pass_yield=0.76,
        sla=0.95,
        ebitda=24.8,
        queue_depth=6,
        token_cost_rate=0.2,
        rpm=7.0,
        accept_rate=0.69,
        avg_revision_cost=3.0,
        audio_minutes=18,
    ),
}


@dataclass
class RevenueDecision:
    trigger: Trigger
    notes: str
    actions: List[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RevenueMetricsService:
    """Keeps KPI samples and per-job records, and flags threshold breaches."""

    RPM_FLOOR = 6.0
    LIGHT_QUEUE = 8
    ACCEPT_RATE_FLOOR = 0.35
    REVISION_COST_CEILING = 4.0

    def __init__(self) -> None:
        self._samples: List[Dict[str, Any]] = []
        self._decisions: List[RevenueDecision] = []
        self._jobs: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def record(self, snapshot: RevenueSnapshot, at: Optional[datetime] = None) -> List[RevenueDecision]:
        at = at or datetime.now(timezone.utc)
        decisions = self.evaluate_thresholds(snapshot, at=at)
        with self._lock:
            self._samples.append({"timestamp": at, **asdict(snapshot)})
            self._decisions.extend(decisions)
        return decisions

    def snapshot(self, window: Window, now: Optional[datetime] = None) -> RevenueSnapshot:
        """Mean of the samples recorded within ``window`` of ``now``."""
        now = now or datetime.now(timezone.utc)
        with self._lock:
            samples = list(self._samples)
        if not samples:
            return PLACEHOLDER_SNAPSHOTS[window]

        frame = pd.DataFrame.from_records(samples)
        recent = frame[frame["timestamp"] >= now - window.span]
        if recent.empty:
            return PLACEHOLDER_SNAPSHOTS[window]

        means = recent.drop(columns=["timestamp"]).mean()
        values = {name: float(value) for name, value in means.items()}
        values["queue_depth"] = int(round(values["queue_depth"]))
        return RevenueSnapshot(**values)

    def evaluate_thresholds(
        self, snapshot: RevenueSnapshot, at: Optional[datetime] = None
    ) -> List[RevenueDecision]:
        at = at or datetime.now(timezone.utc)
        decisions = []
        if snapshot.rpm < self.RPM_FLOOR and snapshot.queue_depth < self.LIGHT_QUEUE:
            decisions.append(
                RevenueDecision(
                    trigger=Trigger.LOW_RPM,
                    notes="RPM below profitability floor while queue is light.",
                    actions=["routing.rebalance", "market.search"],
                    created_at=at,
                )
            )
        if snapshot.accept_rate < self.ACCEPT_RATE_FLOOR:
            decisions.append(
                RevenueDecision(
                    trigger=Trigger.LOW_ACCEPT_RATE,
                    notes="Low acceptance rate detected.",
                    actions=["tighten-intake-filters", "reinforce-briefing"],
                    created_at=at,
                )
            )
        if snapshot.avg_revision_cost > self.REVISION_COST_CEILING:
            decisions.append(
                RevenueDecision(
                    trigger=Trigger.HIGH_REVISION_COST,
                    notes="Average revision cost too high.",
                    actions=["increase-pricing", "strengthen-checklists"],
                    created_at=at,
                )
            )
        return decisions

    def recent_decisions(self, limit: int = 5) -> List[RevenueDecision]:
        if limit <= 0:
            return []
        with self._lock:
            return self._decisions[-limit:]

    def upsert_job(self, job_id: str, **fields: Any) -> int:
        """Merge ``fields`` into the job record; returns the number of known jobs."""
        with self._lock:
            record = self._jobs.setdefault(job_id, {"job_id": job_id})
            record.update({key: value for key, value in fields.items() if value is not None})
            return len(self._jobs)

    def jobs(self) -> pd.DataFrame:
        with self._lock:
            records = [dict(record) for record in self._jobs.values()]
        return pd.DataFrame.from_records(records)
