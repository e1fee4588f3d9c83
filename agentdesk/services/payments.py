from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterable, List, Optional


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


@dataclass
class InvoiceItem:
    name: str
    qty: int
    price: float


@dataclass
class Invoice:
    id: str
    pay_url: str
    status: InvoiceStatus
    currency: str
    amount: float
    line_items: List[InvoiceItem]
    issued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class PaymentEvent:
    invoice_id: str
    status: InvoiceStatus
    metadata: Dict[str, str] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class PaymentsService:
    """Invoice bookkeeping with an append-only event log."""

    def __init__(self, pay_base_url: str = "https://payments.example/pay") -> None:
        self.pay_base_url = pay_base_url
        self._invoices: Dict[str, Invoice] = {}
        self._events: List[PaymentEvent] = []
        self._lock = threading.Lock()

    def create_invoice(self, client_id: str, currency: str, items: Iterable[InvoiceItem]) -> Invoice:
        line_items = list(items)
        invoice = Invoice(
            id=str(uuid.uuid4()),
            pay_url=f"{self.pay_base_url}/{uuid.uuid4()}",
            status=InvoiceStatus.PENDING,
            currency=currency,
            amount=sum(item.qty * item.price for item in line_items),
            line_items=line_items,
        )
        with self._lock:
            self._invoices[invoice.id] = invoice
            self._events.append(
                PaymentEvent(invoice_id=invoice.id, status=InvoiceStatus.PENDING, metadata={"client_id": client_id})
            )
        return invoice

    def poll(self, invoice_id: str) -> Optional[Invoice]:
        with self._lock:
            return self._invoices.get(invoice_id)

    def settle(
        self,
        invoice_id: str,
        status: InvoiceStatus,
        metadata: Optional[Dict[str, str]] = None,
    ) -> Optional[Invoice]:
        with self._lock:
            invoice = self._invoices.get(invoice_id)
            if invoice is None:
                return None
            invoice = replace(invoice, status=status)
            self._invoices[invoice_id] = invoice
            self._events.append(PaymentEvent(invoice_id=invoice_id, status=status, metadata=dict(metadata or {})))
        return invoice

    def events_for(self, invoice_id: str) -> List[PaymentEvent]:
        with self._lock:
            return [event for event in self._events if event.invoice_id == invoice_id]
