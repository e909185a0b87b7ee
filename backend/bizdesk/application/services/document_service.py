"""Application service producing PDF documents for quotes, orders and reports."""

import logging
from dataclasses import dataclass
from datetime import date

from bizdesk.application.interfaces import DocumentRenderer
from bizdesk.application.services.company_settings_service import CompanySettingsService
from bizdesk.application.services.order_service import OrderService
from bizdesk.application.services.quote_service import QuoteService
from bizdesk.application.services.report_service import ReportService
from bizdesk.domain.entities import ReportFilters
from bizdesk.domain.exceptions import EmptyReportError

logger = logging.getLogger(__name__)


@dataclass
class RenderedDocument:
    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class DocumentService:
    """Looks up the data for a document and hands it to the renderer.

    Reports with no matching rows are refused with EmptyReportError instead
    of producing an empty PDF.
    """

    def __init__(
        self,
        renderer: DocumentRenderer,
        quotes: QuoteService,
        orders: OrderService,
        reports: ReportService,
        company: CompanySettingsService,
    ):
        self._renderer = renderer
        self._quotes = quotes
        self._orders = orders
        self._reports = reports
        self._company = company

    async def quote_pdf(self, quote_id: str) -> RenderedDocument:
        quote = await self._quotes.get_quote(quote_id)
        company = await self._company.get_settings()
        content = self._renderer.render_quote(quote, company)
        logger.info("Rendered quote %s (%d bytes)", quote.number, len(content))
        return RenderedDocument(f"orcamento-{quote.number}.pdf", content)

    async def receipt_pdf(self, order_id: str) -> RenderedDocument:
        order = await self._orders.get_order(order_id)
        company = await self._company.get_settings()
        content = self._renderer.render_receipt(order, company)
        logger.info("Rendered receipt for order %s (%d bytes)", order.number, len(content))
        return RenderedDocument(f"recibo-{order.number}.pdf", content)

    async def orders_report_pdf(self, filters: ReportFilters) -> RenderedDocument:
        report = await self._reports.orders_report(filters)
        if not report.orders:
            raise EmptyReportError("orders")
        lines = filters.describe(await self._reports.clients())
        content = self._renderer.render_orders_report(report, await self._company.get_settings(), lines)
        return RenderedDocument(f"relatorio-pedidos-{date.today():%Y-%m-%d}.pdf", content)

    async def clients_report_pdf(self, filters: ReportFilters) -> RenderedDocument:
        report = await self._reports.clients_report(filters)
        if not report.clients:
            raise EmptyReportError("clients")
        lines = filters.describe()
        content = self._renderer.render_clients_report(report, await self._company.get_settings(), lines)
        return RenderedDocument(f"relatorio-clientes-{date.today():%Y-%m-%d}.pdf", content)

    async def client_orders_report_pdf(self, filters: ReportFilters) -> RenderedDocument:
        report = await self._reports.client_orders_report(filters)
        if not report.groups:
            raise EmptyReportError("client orders")
        lines = filters.describe(await self._reports.clients())
        content = self._renderer.render_client_orders_report(
            report, await self._company.get_settings(), lines
        )
        return RenderedDocument(f"relatorio-servicos-{date.today():%Y-%m-%d}.pdf", content)
