from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from agentdesk.services.compliance import ComplianceService
from agentdesk.tools.base import Tool
from agentdesk.tools.parameters import ParameterKind, ParameterSpec


class ComplianceScanTool(Tool):
    name = "compliance.scan"
    summary = "Runs a lightweight compliance scan for risky content."
    parameters = (
        ParameterSpec("text", ParameterKind.STRING, required=False, description="Plain text body."),
        ParameterSpec("html", ParameterKind.STRING, required=False, description="HTML body."),
        ParameterSpec("doc_id", ParameterKind.STRING, required=False, description="Document identifier."),
    )

    def __init__(self, compliance: ComplianceService) -> None:
        self.compliance = compliance

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        report = self.compliance.scan(
            text=arguments.get("text"), html=arguments.get("html"), doc_id=arguments.get("doc_id")
        )
        return asdict(report)


class FreezeTool(Tool):
    name = "admin.freeze"
    summary = "Freezes persona or entire fleet with justification."
    parameters = (
        ParameterSpec("scope", ParameterKind.STRING, description="persona|all"),
        ParameterSpec("reason", ParameterKind.STRING, description="Justification."),
    )

    def __init__(self, compliance: ComplianceService) -> None:
        self.compliance = compliance

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return {"ok": self.compliance.freeze(arguments["scope"], arguments["reason"])}
