"""Application service for the order lifecycle."""

import logging
from dataclasses import replace

from bizdesk.application.interfaces import BusinessStore
from bizdesk.application.schemas.order import OrderCreate
from bizdesk.application.services.cache_sync import ensure_loaded, reconcile
from bizdesk.application.services.data_manager import CacheOperation, Collection, DataManager
from bizdesk.application.services.quote_service import build_products, build_services, find_client
from bizdesk.domain.entities import Order, OrderStatus, items_total
from bizdesk.domain.exceptions import BusinessRuleError, EntityNotFoundError
from bizdesk.domain.numbering import DocumentNumbering

logger = logging.getLogger(__name__)


class OrderService:
    """Orchestrates order creation, status tracking and removal."""

    def __init__(
        self,
        store: BusinessStore,
        data_manager: DataManager,
        numbering: DocumentNumbering | None = None,
    ):
        self._store = store
        self._data = data_manager
        self._numbering = numbering or DocumentNumbering()

    async def list_orders(self, status: OrderStatus | None = None) -> list[Order]:
        orders: list[Order] = await ensure_loaded(self._data, Collection.ORDERS)
        if status is not None:
            orders = [o for o in orders if o.status == status]
        return orders

    async def get_order(self, order_id: str) -> Order:
        orders: list[Order] = await ensure_loaded(self._data, Collection.ORDERS)
        for order in orders:
            if order.id == order_id:
                return order
        raise EntityNotFoundError("Order", order_id)

    async def create_order(self, data: OrderCreate) -> Order:
        """Register an order that did not come from a quote."""
        client = await find_client(self._data, data.client_id)
        services = build_services(data.services)
        products = build_products(data.products)
        if not services and not products:
            raise BusinessRuleError("An order needs at least one service or product")

        number = await self._store.reserve_number("order")
        order = Order(
            client_id=client.id,
            client=client,
            number=self._numbering.order_number(number),
            services=services,
            products=products,
            total=items_total(services, products),
        )
        created = await self._store.add_order(order)
        logger.info("Created order %s for client %s", created.number, client.id)

        self._data.update_local_data(Collection.ORDERS, CacheOperation.ADD, created)
        await reconcile(self._data, Collection.ORDERS)
        return created

    async def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        order = replace(await self.get_order(order_id))
        order.transition_to(status)

        saved = await self._store.update_order(order)
        logger.info("Order %s is now %s", saved.number, saved.status.value)

        self._data.update_local_data(Collection.ORDERS, CacheOperation.UPDATE, saved, order_id)
        await reconcile(self._data, Collection.ORDERS)
        return saved

    async def delete_order(self, order_id: str) -> None:
        order = await self.get_order(order_id)
        deleted = await self._store.delete_order(order_id)
        if not deleted:
            raise EntityNotFoundError("Order", order_id)
        logger.info("Deleted order %s", order.number)

        self._data.update_local_data(Collection.ORDERS, CacheOperation.DELETE, None, order_id)
        await reconcile(self._data, Collection.ORDERS)
