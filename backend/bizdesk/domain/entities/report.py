"""Report value objects — filters and aggregated results over cached collections."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from bizdesk.domain.entities.client import Client, ClientType
from bizdesk.domain.entities.order import Order, OrderStatus


@dataclass
class ReportFilters:
    """Optional filters shared by the reports. ``None`` means "all"."""

    client_id: str | None = None
    city: str | None = None
    state: str | None = None
    status: OrderStatus | None = None
    start_date: date | None = None
    end_date: date | None = None

    def describe(self, clients: list[Client] | None = None) -> list[str]:
        """Human-readable lines for the filters actually applied."""
        lines: list[str] = []
        if self.client_id:
            name = next((c.name for c in clients or [] if c.id == self.client_id), "N/A")
            lines.append(f"Cliente: {name}")
        if self.city:
            lines.append(f"Cidade: {self.city}")
        if self.state:
            lines.append(f"Estado: {self.state}")
        if self.status:
            lines.append(f"Status: {ORDER_STATUS_LABELS[self.status]}")
        if self.start_date:
            end = self.end_date.strftime("%d/%m/%Y") if self.end_date else "hoje"
            lines.append(f"Período: {self.start_date.strftime('%d/%m/%Y')} até {end}")
        elif self.end_date:
            lines.append(f"Período: até {self.end_date.strftime('%d/%m/%Y')}")
        return lines


ORDER_STATUS_LABELS: dict[OrderStatus, str] = {
    OrderStatus.PENDING: "Pendente",
    OrderStatus.IN_PROGRESS: "Em Andamento",
    OrderStatus.COMPLETED: "Concluído",
    OrderStatus.CANCELLED: "Cancelado",
}


@dataclass
class OrdersReport:
    filters: ReportFilters
    orders: list[Order]
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_value(self) -> float:
        return round(sum(o.total for o in self.orders), 2)

    @property
    def item_count(self) -> int:
        return sum(o.item_count for o in self.orders)

    @property
    def average_value(self) -> float:
        if not self.orders:
            return 0.0
        return round(self.total_value / len(self.orders), 2)


@dataclass
class ClientsReport:
    filters: ReportFilters
    clients: list[Client]
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def individuals(self) -> int:
        return sum(1 for c in self.clients if c.type == ClientType.INDIVIDUAL)

    @property
    def organizations(self) -> int:
        return sum(1 for c in self.clients if c.type == ClientType.ORGANIZATION)


@dataclass
class ClientOrdersGroup:
    client: Client
    orders: list[Order] = field(default_factory=list)

    @property
    def subtotal(self) -> float:
        return round(sum(o.total for o in self.orders), 2)


@dataclass
class ClientOrdersReport:
    filters: ReportFilters
    groups: list[ClientOrdersGroup]
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def grand_total(self) -> float:
        return round(sum(g.subtotal for g in self.groups), 2)

    @property
    def order_count(self) -> int:
        return sum(len(g.orders) for g in self.groups)


@dataclass
class RevenueSummary:
    """Completed-order totals over every order, independent of report filters."""

    completed_orders: int
    total_revenue: float
