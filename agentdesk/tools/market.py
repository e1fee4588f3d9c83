from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from agentdesk.tools.base import Tool
from agentdesk.tools.parameters import ParameterKind, ParameterSpec

MARKET_URL = "https://market.example"


class MarketSearchTool(Tool):
    name = "market.search"
    summary = "Searches authorised marketplaces for compliant leads."
    parameters = (
        ParameterSpec("query", ParameterKind.STRING, description="Search keywords."),
        ParameterSpec("locales", ParameterKind.STRING_LIST, required=False, description="Target locales."),
        ParameterSpec("price_min", ParameterKind.DOUBLE, required=False, description="Minimum price."),
        ParameterSpec("deadline_min_hours", ParameterKind.INT, required=False, description="Minimum deadline lead."),
        ParameterSpec("size_max_minutes", ParameterKind.INT, required=False, description="Maximum duration minutes."),
        ParameterSpec("verified_only", ParameterKind.BOOL, required=False, description="Verified clients only."),
    )

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        budget = max(180.0, float(arguments.get("price_min", 0.0)))
        hours = max(2, arguments.get("deadline_min_hours", 2))
        deadline = datetime.now(timezone.utc) + timedelta(hours=hours)
        locales = arguments.get("locales") or ["en-US"]
        return {
            "leads": [
                {
                    "id": str(uuid.uuid4()),
                    "title": f"{arguments['query']} copy refresh",
                    "budget": budget,
                    "deadline": deadline.isoformat(),
                    "url": f"{MARKET_URL}/jobs/{uuid.uuid4()}",
                    "locale": locales[0],
                    "type": "translate",
                    "verified": arguments.get("verified_only", False),
                }
            ]
        }


class MarketProposeTool(Tool):
    """Submits a proposal; in dry-run sourcing mode nothing is sent."""

    name = "market.propose"
    summary = "Submits a proposal in live or dry-run mode."
    parameters = (
        ParameterSpec("lead_id", ParameterKind.STRING, description="Lead identifier."),
        ParameterSpec("persona_id", ParameterKind.STRING, description="Persona submitting."),
        ParameterSpec("pitch_md", ParameterKind.STRING, description="Markdown pitch."),
        ParameterSpec("samples", ParameterKind.STRING_LIST, required=False, description="Portfolio samples."),
        ParameterSpec("price", ParameterKind.DOUBLE, description="Offered price."),
        ParameterSpec("deadline_hours", ParameterKind.INT, description="Hours until delivery."),
    )

    def __init__(self, sourcing_mode: str = "dry_run") -> None:
        self.sourcing_mode = sourcing_mode

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        status = "sent" if self.sourcing_mode == "live" else "dry_run"
        return {"status": status, "url": f"{MARKET_URL}/proposals/{uuid.uuid4()}"}


class MarketStatusTool(Tool):
    name = "market.status"
    summary = "Fetches the latest status of a submitted proposal."
    parameters = (ParameterSpec("lead_id", ParameterKind.STRING, description="Lead identifier."),)

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return {"lead_id": arguments["lead_id"], "state": "open"}
