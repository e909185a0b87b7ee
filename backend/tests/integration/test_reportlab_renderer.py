"""Smoke tests for the reportlab PDF renderer."""

import base64
from datetime import datetime, timezone

import pytest

from bizdesk.domain.entities import (
    Client,
    ClientOrdersGroup,
    ClientOrdersReport,
    ClientsReport,
    ClientType,
    CompanySettings,
    Order,
    OrdersReport,
    OrderStatus,
    ProductItem,
    Quote,
    ReportFilters,
    ServiceItem,
)
from bizdesk.infrastructure.documents import ReportLabDocumentRenderer

# 1x1 transparent PNG
_PIXEL = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def renderer() -> ReportLabDocumentRenderer:
    return ReportLabDocumentRenderer()


@pytest.fixture
def client() -> Client:
    return Client(
        type=ClientType.ORGANIZATION,
        name="ACME & Filhos <Ltda>",
        document="11222333000181",
        email="contato@acme.com.br",
        phone="4133330000",
        address="Rua XV",
        number="100",
        city="Curitiba",
        state="PR",
    )


@pytest.fixture
def company() -> CompanySettings:
    return CompanySettings(
        company_name="BizDesk Serviços",
        tax_id="11222333000181",
        city="Curitiba",
        state="PR",
        phone="41999990000",
        logo="data:image/png;base64," + _PIXEL,
    )


@pytest.fixture
def order(client) -> Order:
    return Order(
        client_id=client.id,
        client=client,
        number="PED0001",
        services=[ServiceItem(description="Manutenção", hours=2, hourly_rate=120)],
        products=[ProductItem(description="Peça", quantity=1, unit_price=60)],
        total=300,
        status=OrderStatus.COMPLETED,
        completed_at=datetime(2024, 5, 2, tzinfo=timezone.utc),
    )


def test_quote_pdf(renderer, client, company):
    quote = Quote(
        client_id=client.id,
        client=client,
        number="ORC0001",
        services=[ServiceItem(description="Projeto", hours=10, hourly_rate=150)],
        discount=100,
        notes="Pagamento em 30 dias.\nValidade conforme acima.",
    )
    quote.recalculate()

    content = renderer.render_quote(quote, company)

    assert content.startswith(b"%PDF")


def test_receipt_without_company(renderer, order):
    assert renderer.render_receipt(order, None).startswith(b"%PDF")


def test_reports(renderer, client, company, order):
    filters = ReportFilters(state="PR")
    lines = filters.describe()

    assert renderer.render_orders_report(OrdersReport(filters, [order]), company, lines).startswith(b"%PDF")
    assert renderer.render_clients_report(ClientsReport(filters, [client]), company, lines).startswith(b"%PDF")
    grouped = ClientOrdersReport(filters, [ClientOrdersGroup(client=client, orders=[order])])
    assert renderer.render_client_orders_report(grouped, company, lines).startswith(b"%PDF")


def test_broken_logo_is_skipped(renderer, order, company):
    company.logo = base64.b64encode(b"not an image").decode()
    assert renderer.render_receipt(order, company).startswith(b"%PDF")
