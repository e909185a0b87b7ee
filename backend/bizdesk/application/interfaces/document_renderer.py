"""Abstract interface (port) for rendering business documents to PDF."""

from abc import ABC, abstractmethod

from bizdesk.domain.entities import (
    ClientOrdersReport,
    ClientsReport,
    CompanySettings,
    Order,
    OrdersReport,
    Quote,
)


class DocumentRenderer(ABC):
    """Port for document generation — implemented in the infrastructure layer.

    Every method returns the finished PDF as bytes. ``company`` is printed in
    the header when configured; renderers fall back to a plain title otherwise.
    """

    @abstractmethod
    def render_quote(self, quote: Quote, company: CompanySettings | None) -> bytes:
        ...

    @abstractmethod
    def render_receipt(self, order: Order, company: CompanySettings | None) -> bytes:
        ...

    @abstractmethod
    def render_orders_report(
        self, report: OrdersReport, company: CompanySettings | None, filter_lines: list[str]
    ) -> bytes:
        ...

    @abstractmethod
    def render_clients_report(
        self, report: ClientsReport, company: CompanySettings | None, filter_lines: list[str]
    ) -> bytes:
        ...

    @abstractmethod
    def render_client_orders_report(
        self, report: ClientOrdersReport, company: CompanySettings | None, filter_lines: list[str]
    ) -> bytes:
        ...
