from datetime import datetime, timedelta, timezone

from agentdesk.services.compliance import ComplianceService
from agentdesk.services.payments import InvoiceItem, InvoiceStatus, PaymentsService
from agentdesk.services.retrieval import RetrievalService
from agentdesk.services.revenue import RevenueMetricsService, RevenueSnapshot, Trigger, Window


def weak_snapshot(**overrides):
    values = dict(
        jobs_per_day=1.0,
        first_pass_yield=0.6,
        sla=0.9,
        ebitda=4.0,
        queue_depth=2,
        token_cost_rate=0.3,
        rpm=5.0,
        accept_rate=0.3,
        avg_revision_cost=5.5,
        audio_minutes=12,
    )
    values.update(overrides)
    return RevenueSnapshot(**values)


def test_retrieval_returns_ranked_chunks(tmp_path):
    doc = tmp_path / "kb.txt"
    doc.write_text(
        "Swift AI makes Agents productive. Teams ship faster. Reviews are calm.\n"
        "Billing runs monthly. Agents draft invoices. Clients pay online.",
        encoding="utf-8",
    )
    rag = RetrievalService()
    stats = rag.index([str(doc)], "demo")
    assert (stats.files, stats.chunks) == (1, 2)

    results = rag.retrieve("agents productive", ["demo"], k=2)
    assert len(results) == 2
    assert results[0].score >= results[1].score
    assert "productive" in results[0].text


def test_retrieval_blank_query_and_unreadable_path():
    rag = RetrievalService()
    stats = rag.index(["/does/not/exist.md"], "demo")
    assert stats.files == 1
    assert rag.retrieve("   ", ["demo"]) == []
    assert rag.retrieve("placeholder", ["demo"], k=0)[0].source == "/does/not/exist.md"


def test_compliance_detects_email_and_policy():
    service = ComplianceService()
    report = service.scan(text="Contact me at founder@example.com and let's hack the system")
    assert "email" in report.flags
    assert "policy" in report.flags
    assert report.verdict == "manual_review"


def test_compliance_strips_html_and_records_doc_id():
    report = ComplianceService().scan(html="<p>Call +4915123456789</p>", doc_id="d-7")
    assert report.flags == ["phone"]
    assert report.verdict == "ok"
    assert report.details[-1] == "doc_id=d-7"


def test_sanitizer_removes_script_blocks():
    clean, removed = ComplianceService().sanitize("<script>alert('x')</script><p>Ok</p>")
    assert clean == "<p>Ok</p>"
    assert removed == ["script/style"]


def test_freeze_requires_reason_and_known_scope():
    service = ComplianceService()
    assert service.freeze("all", "incident")
    assert not service.freeze("team", "incident")
    assert not service.freeze("persona", "")


def test_payments_lifecycle():
    service = PaymentsService()
    invoice = service.create_invoice("client", "EUR", [InvoiceItem(name="Work", qty=2, price=10)])
    assert invoice.status is InvoiceStatus.PENDING
    assert invoice.amount == 20
    assert len(service.events_for(invoice.id)) == 1

    service.settle(invoice.id, InvoiceStatus.PAID, {"ref": "tx-1"})
    assert service.poll(invoice.id).status is InvoiceStatus.PAID
    assert [event.status for event in service.events_for(invoice.id)] == [
        InvoiceStatus.PENDING,
        InvoiceStatus.PAID,
    ]
    assert service.settle("unknown", InvoiceStatus.PAID) is None


def test_revenue_decisions_triggered():
    service = RevenueMetricsService()
    decisions = service.evaluate_thresholds(weak_snapshot())
    assert {d.trigger for d in decisions} == {
        Trigger.LOW_RPM,
        Trigger.LOW_ACCEPT_RATE,
        Trigger.HIGH_REVISION_COST,
    }
    service.record(weak_snapshot())
    assert len(service.recent_decisions()) == 3


def test_revenue_snapshot_averages_samples_in_window():
    service = RevenueMetricsService()
    now = datetime(2024, 5, 10, tzinfo=timezone.utc)
    service.record(weak_snapshot(rpm=6.0, queue_depth=3), at=now - timedelta(hours=2))
    service.record(weak_snapshot(rpm=8.0, queue_depth=4), at=now - timedelta(hours=1))
    service.record(weak_snapshot(rpm=100.0), at=now - timedelta(days=3))

    day = service.snapshot(Window.ONE_DAY, now=now)
    assert day.rpm == 7.0
    assert day.queue_depth == 4

    week = service.snapshot(Window.SEVEN_DAY, now=now)
    assert week.rpm == 38.0


def test_revenue_snapshot_placeholder_when_empty():
    snapshot = RevenueMetricsService().snapshot(Window.SEVEN_DAY)
    assert snapshot.rpm == 7.0
