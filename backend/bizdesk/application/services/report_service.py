"""Report aggregation over the cached collections."""

from bizdesk.application.services.cache_sync import ensure_loaded
from bizdesk.application.services.data_manager import Collection, DataManager
from bizdesk.domain.entities import (
    Client,
    ClientOrdersGroup,
    ClientOrdersReport,
    ClientsReport,
    Order,
    OrdersReport,
    OrderStatus,
    ReportFilters,
    RevenueSummary,
)


def _same(value: str, wanted: str | None) -> bool:
    return wanted is None or (value or "").casefold() == wanted.casefold()


class ReportService:
    """Builds report data from snapshots; never writes.

    Every collection a report needs is loaded on first use, after that the
    cached snapshot is used as-is.
    """

    def __init__(self, data_manager: DataManager):
        self._data = data_manager

    async def clients(self) -> list[Client]:
        return await ensure_loaded(self._data, Collection.CLIENTS)

    async def summary(self) -> RevenueSummary:
        """Completed orders and their revenue across the whole order book."""
        orders: list[Order] = await ensure_loaded(self._data, Collection.ORDERS)
        completed = [o for o in orders if o.status == OrderStatus.COMPLETED]
        return RevenueSummary(
            completed_orders=len(completed),
            total_revenue=round(sum(o.total for o in completed), 2),
        )

    async def orders_report(self, filters: ReportFilters) -> OrdersReport:
        orders = await self._filtered_orders(filters)
        if filters.status is not None:
            orders = [o for o in orders if o.status == filters.status]
        if filters.start_date is not None:
            orders = [o for o in orders if o.reference_date.date() >= filters.start_date]
        if filters.end_date is not None:
            # the whole end day is included
            orders = [o for o in orders if o.reference_date.date() <= filters.end_date]
        return OrdersReport(filters=filters, orders=orders)

    async def clients_report(self, filters: ReportFilters) -> ClientsReport:
        clients = await self.clients()
        selected = [
            c for c in clients
            if _same(c.city, filters.city) and _same(c.state, filters.state)
        ]
        selected.sort(key=lambda c: c.name.casefold())
        return ClientsReport(filters=filters, clients=selected)

    async def client_orders_report(self, filters: ReportFilters) -> ClientOrdersReport:
        """Completed orders grouped per client, in the order clients first appear."""
        orders = [
            o for o in await self._filtered_orders(filters)
            if o.status == OrderStatus.COMPLETED
        ]
        clients = {c.id: c for c in await self.clients()}

        groups: dict[str, ClientOrdersGroup] = {}
        for order in orders:
            group = groups.get(order.client_id)
            if group is None:
                client = order.client or clients.get(order.client_id)
                if client is None:
                    continue
                group = groups[order.client_id] = ClientOrdersGroup(client=client)
            group.orders.append(order)
        return ClientOrdersReport(filters=filters, groups=list(groups.values()))

    async def _filtered_orders(self, filters: ReportFilters) -> list[Order]:
        """Orders matching the client, city and state filters."""
        orders: list[Order] = await ensure_loaded(self._data, Collection.ORDERS)
        clients = {c.id: c for c in await self.clients()}

        selected: list[Order] = []
        for order in orders:
            if filters.client_id is not None and order.client_id != filters.client_id:
                continue
            client = order.client or clients.get(order.client_id)
            city = client.city if client else ""
            state = client.state if client else ""
            if not (_same(city, filters.city) and _same(state, filters.state)):
                continue
            selected.append(order)
        return selected
