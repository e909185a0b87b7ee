"""Unit tests for DocumentService orchestration, with a recording renderer."""

import pytest

from bizdesk.application.interfaces import DocumentRenderer
from bizdesk.application.services import (
    CompanySettingsService,
    DocumentService,
    OrderService,
    QuoteService,
    ReportService,
)
from bizdesk.domain.entities import CompanySettings, Order, OrderStatus, Quote, ReportFilters, ServiceItem
from bizdesk.domain.exceptions import EmptyReportError, EntityNotFoundError


class RecordingRenderer(DocumentRenderer):
    def __init__(self):
        self.rendered: list[tuple[str, object]] = []

    def _record(self, kind: str, payload) -> bytes:
        self.rendered.append((kind, payload))
        return b"%PDF-fake"

    def render_quote(self, quote, company):
        return self._record("quote", (quote, company))

    def render_receipt(self, order, company):
        return self._record("receipt", (order, company))

    def render_orders_report(self, report, company, filter_lines):
        return self._record("orders", (report, filter_lines))

    def render_clients_report(self, report, company, filter_lines):
        return self._record("clients", (report, filter_lines))

    def render_client_orders_report(self, report, company, filter_lines):
        return self._record("client_orders", (report, filter_lines))


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def documents(store, data_manager, renderer) -> DocumentService:
    return DocumentService(
        renderer,
        QuoteService(store, data_manager),
        OrderService(store, data_manager),
        ReportService(data_manager),
        CompanySettingsService(store, data_manager),
    )


@pytest.mark.asyncio
async def test_quote_pdf_passes_company_settings(documents, renderer, store, client_factory):
    client = client_factory()
    store.clients.append(client)
    store.company = CompanySettings(company_name="ACME")
    store.quotes.append(Quote(client_id=client.id, number="ORC0007"))

    document = await documents.quote_pdf(store.quotes[0].id)

    assert document.filename == "orcamento-ORC0007.pdf"
    assert document.content.startswith(b"%PDF")
    kind, (quote, company) = renderer.rendered[0]
    assert kind == "quote"
    assert quote.client.name == client.name
    assert company.company_name == "ACME"


@pytest.mark.asyncio
async def test_receipt_for_unknown_order(documents):
    with pytest.raises(EntityNotFoundError):
        await documents.receipt_pdf("missing")


@pytest.mark.asyncio
async def test_empty_reports_are_refused(documents, renderer):
    with pytest.raises(EmptyReportError):
        await documents.orders_report_pdf(ReportFilters())
    with pytest.raises(EmptyReportError):
        await documents.clients_report_pdf(ReportFilters())
    with pytest.raises(EmptyReportError):
        await documents.client_orders_report_pdf(ReportFilters())
    assert renderer.rendered == []


@pytest.mark.asyncio
async def test_orders_report_pdf_receives_filter_lines(documents, renderer, store, client_factory):
    client = client_factory()
    store.clients.append(client)
    store.orders.append(
        Order(
            client_id=client.id,
            number="PED0001",
            services=[ServiceItem(description="Serviço", hours=1, hourly_rate=80)],
            total=80,
            status=OrderStatus.COMPLETED,
        )
    )

    document = await documents.orders_report_pdf(ReportFilters(client_id=client.id))

    assert document.filename.startswith("relatorio-pedidos-")
    kind, (report, lines) = renderer.rendered[0]
    assert kind == "orders"
    assert len(report.orders) == 1
    assert lines == [f"Cliente: {client.name}"]
