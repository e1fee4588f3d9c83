from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from agentdesk.services.compliance import ComplianceService
from agentdesk.services.payments import PaymentsService
from agentdesk.services.retrieval import RetrievalService
from agentdesk.services.revenue import RevenueMetricsService
from agentdesk.tools.admin import ComplianceScanTool, FreezeTool
from agentdesk.tools.base import Tool
from agentdesk.tools.billing import CreateInvoiceTool, IssueReceiptTool, PollInvoiceTool
from agentdesk.tools.content import DocFormatTool, SanitizeTool, WebFetchTool
from agentdesk.tools.delivery import EmailDraftTool, GitPatchTool, StyleQATool
from agentdesk.tools.market import MarketProposeTool, MarketSearchTool, MarketStatusTool
from agentdesk.tools.metrics import RebalanceTool, SnapshotTool, UpsertJobTool
from agentdesk.tools.registry import ToolRegistry
from agentdesk.tools.retrieval import RagIndexTool, RagRetrieveTool


@dataclass
class ToolServices:
    """Collaborators handed to the builtin tools."""

    retrieval: RetrievalService = field(default_factory=RetrievalService)
    payments: PaymentsService = field(default_factory=PaymentsService)
    compliance: ComplianceService = field(default_factory=ComplianceService)
    revenue: RevenueMetricsService = field(default_factory=RevenueMetricsService)
    sourcing_mode: str = "dry_run"


def builtin_tools(services: ToolServices) -> List[Tool]:
    return [
        WebFetchTool(),
        DocFormatTool(),
        RagIndexTool(services.retrieval),
        RagRetrieveTool(services.retrieval),
        StyleQATool(),
        GitPatchTool(),
        EmailDraftTool(),
        SanitizeTool(services.compliance),
        MarketSearchTool(),
        MarketProposeTool(services.sourcing_mode),
        MarketStatusTool(),
        UpsertJobTool(services.revenue),
        SnapshotTool(services.revenue),
        RebalanceTool(),
        CreateInvoiceTool(services.payments),
        PollInvoiceTool(services.payments),
        IssueReceiptTool(),
        ComplianceScanTool(services.compliance),
        FreezeTool(services.compliance),
    ]


def build_registry(services: Optional[ToolServices] = None) -> ToolRegistry:
    services = services or ToolServices()
    return ToolRegistry([tool.descriptor() for tool in builtin_tools(services)])
