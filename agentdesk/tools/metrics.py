from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from agentdesk.services.revenue import RevenueMetricsService, Window
from agentdesk.tools.base import Tool
from agentdesk.tools.parameters import ParameterKind, ParameterSpec

SNAPSHOT_FIELDS = ("rpm", "accept_rate", "queue_depth", "avg_revision_cost", "token_cost_rate")


class UpsertJobTool(Tool):
    name = "metrics.upsert_job"
    summary = "Upserts metrics for a finished or in-flight job."
    parameters = (
        ParameterSpec("job_id", ParameterKind.STRING, description="Job identifier."),
        ParameterSpec("persona_id", ParameterKind.STRING, description="Persona responsible."),
        ParameterSpec("started_at", ParameterKind.STRING, description="ISO8601 start time."),
        ParameterSpec("finished_at", ParameterKind.STRING, required=False, description="ISO8601 finish time."),
        ParameterSpec("tokens", ParameterKind.INT, required=False, description="Token usage."),
        ParameterSpec("audio_minutes", ParameterKind.DOUBLE, required=False, description="Audio minutes consumed."),
        ParameterSpec("price", ParameterKind.DOUBLE, required=False, description="Price charged."),
        ParameterSpec("revisions", ParameterKind.INT, required=False, description="Revision count."),
    )

    def __init__(self, revenue: RevenueMetricsService) -> None:
        self.revenue = revenue

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        fields = dict(arguments)
        job_id = fields.pop("job_id")
        return {"ok": True, "jobs": self.revenue.upsert_job(job_id, **fields)}


class SnapshotTool(Tool):
    name = "metrics.snapshot"
    summary = "Returns RPM, accept rate and cost metrics."
    parameters = (ParameterSpec("window", ParameterKind.STRING, description="1d|7d; anything else reads as 7d"),)

    def __init__(self, revenue: RevenueMetricsService) -> None:
        self.revenue = revenue

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        window = Window.ONE_DAY if arguments["window"] == Window.ONE_DAY.value else Window.SEVEN_DAY
        snapshot = asdict(self.revenue.snapshot(window))
        return {name: snapshot[name] for name in SNAPSHOT_FIELDS}


class RebalanceTool(Tool):
    name = "routing.rebalance"
    summary = "Suggests new persona routing based on KPI thresholds."
    parameters = (
        ParameterSpec("targets", ParameterKind.STRING_LIST, description="Persona IDs or segments."),
        ParameterSpec("persona_cap", ParameterKind.INT, required=False, description="Max concurrent jobs per persona."),
    )

    DEFAULT_CAP = 3

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        cap = arguments.get("persona_cap", self.DEFAULT_CAP)
        return {"ok": True, "assignments": {target: cap for target in arguments["targets"]}}
