"""Application service for quote authoring, status transitions and conversion to orders."""

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from bizdesk.application.interfaces import BusinessStore
from bizdesk.application.schemas.quote import (
    ProductItemSchema,
    QuoteCreate,
    QuoteUpdate,
    ServiceItemSchema,
)
from bizdesk.application.services.cache_sync import ensure_loaded, reconcile
from bizdesk.application.services.data_manager import CacheOperation, Collection, DataManager
from bizdesk.domain.entities import (
    Client,
    Order,
    ProductItem,
    Quote,
    QuoteStatus,
    ServiceItem,
)
from bizdesk.domain.exceptions import BusinessRuleError, EntityNotFoundError
from bizdesk.domain.numbering import DocumentNumbering

logger = logging.getLogger(__name__)


def build_services(items: list[ServiceItemSchema]) -> list[ServiceItem]:
    return [
        ServiceItem(
            id=item.id or str(uuid4()),
            description=item.description,
            hours=item.hours,
            hourly_rate=item.hourly_rate,
        )
        for item in items
    ]


def build_products(items: list[ProductItemSchema]) -> list[ProductItem]:
    return [
        ProductItem(
            id=item.id or str(uuid4()),
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
        )
        for item in items
    ]


async def find_client(data_manager: DataManager, client_id: str) -> Client:
    clients: list[Client] = await ensure_loaded(data_manager, Collection.CLIENTS)
    for client in clients:
        if client.id == client_id:
            return client
    raise EntityNotFoundError("Client", client_id)


class QuoteService:
    """Orchestrates quote CRUD and the draft → sent → approved/rejected lifecycle.

    Approving a quote creates a pending order carrying the quote's client and
    line items, numbered from the order counter.
    """

    def __init__(
        self,
        store: BusinessStore,
        data_manager: DataManager,
        numbering: DocumentNumbering | None = None,
        validity_days: int = 30,
    ):
        self._store = store
        self._data = data_manager
        self._numbering = numbering or DocumentNumbering()
        self._validity_days = validity_days

    async def list_quotes(
        self,
        status: QuoteStatus | None = None,
        search: str | None = None,
    ) -> list[Quote]:
        quotes: list[Quote] = await ensure_loaded(self._data, Collection.QUOTES)
        if status is not None:
            quotes = [q for q in quotes if q.status == status]
        if search:
            needle = search.casefold()
            quotes = [
                q for q in quotes
                if needle in q.number.casefold()
                or (q.client is not None and needle in q.client.name.casefold())
            ]
        return quotes

    async def get_quote(self, quote_id: str) -> Quote:
        quotes: list[Quote] = await ensure_loaded(self._data, Collection.QUOTES)
        for quote in quotes:
            if quote.id == quote_id:
                return quote
        raise EntityNotFoundError("Quote", quote_id)

    async def create_quote(self, data: QuoteCreate) -> Quote:
        client = await find_client(self._data, data.client_id)

        quote = Quote(
            client_id=client.id,
            client=client,
            number="",
            services=build_services(data.services),
            products=build_products(data.products),
            discount=data.discount,
            valid_until=data.valid_until or date.today() + timedelta(days=self._validity_days),
            notes=data.notes,
        )
        _finalize_totals(quote)
        quote.number = self._numbering.quote_number(await self._store.reserve_number("quote"))

        created = await self._store.add_quote(quote)
        logger.info("Created quote %s for client %s", created.number, client.id)

        self._data.update_local_data(Collection.QUOTES, CacheOperation.ADD, created)
        await reconcile(self._data, Collection.QUOTES)
        return created

    async def update_quote(self, quote_id: str, data: QuoteUpdate) -> Quote:
        current = await self.get_quote(quote_id)
        if current.status == QuoteStatus.APPROVED:
            raise BusinessRuleError(f"Quote {current.number} is approved and can no longer be edited")

        updated = replace(current, updated_at=datetime.now(timezone.utc))
        if data.client_id is not None and data.client_id != current.client_id:
            client = await find_client(self._data, data.client_id)
            updated.client_id = client.id
            updated.client = client
        if data.services is not None:
            updated.services = build_services(data.services)
        if data.products is not None:
            updated.products = build_products(data.products)
        if data.discount is not None:
            updated.discount = data.discount
        if data.valid_until is not None:
            updated.valid_until = data.valid_until
        if data.notes is not None:
            updated.notes = data.notes
        _finalize_totals(updated)

        saved = await self._store.update_quote(updated)
        logger.info("Updated quote %s", saved.number)

        self._data.update_local_data(Collection.QUOTES, CacheOperation.UPDATE, saved, quote_id)
        await reconcile(self._data, Collection.QUOTES)
        return saved

    async def delete_quote(self, quote_id: str) -> None:
        quote = await self.get_quote(quote_id)
        deleted = await self._store.delete_quote(quote_id)
        if not deleted:
            raise EntityNotFoundError("Quote", quote_id)
        logger.info("Deleted quote %s", quote.number)

        self._data.update_local_data(Collection.QUOTES, CacheOperation.DELETE, None, quote_id)
        await reconcile(self._data, Collection.QUOTES)

    async def send_quote(self, quote_id: str) -> Quote:
        quote = replace(await self.get_quote(quote_id))
        quote.mark_sent()
        return await self._save_status(quote)

    async def reject_quote(self, quote_id: str) -> Quote:
        quote = replace(await self.get_quote(quote_id))
        quote.mark_rejected()
        return await self._save_status(quote)

    async def approve_quote(self, quote_id: str) -> tuple[Quote, Order]:
        """Approve the quote and open a pending order from it."""
        quote = replace(await self.get_quote(quote_id))
        quote.mark_approved()

        number = await self._store.reserve_number("order")
        order = Order(
            client_id=quote.client_id,
            client=quote.client,
            number=self._numbering.order_number(number),
            services=list(quote.services),
            products=list(quote.products),
            total=quote.total,
            quote_id=quote.id,
            is_from_quote=True,
        )

        saved_quote = await self._store.update_quote(quote)
        created_order = await self._store.add_order(order)
        logger.info("Approved quote %s, opened order %s", saved_quote.number, created_order.number)

        self._data.update_local_data(Collection.QUOTES, CacheOperation.UPDATE, saved_quote, quote_id)
        self._data.update_local_data(Collection.ORDERS, CacheOperation.ADD, created_order)
        await reconcile(self._data, Collection.QUOTES, Collection.ORDERS)
        return saved_quote, created_order

    async def _save_status(self, quote: Quote) -> Quote:
        saved = await self._store.update_quote(quote)
        logger.info("Quote %s is now %s", saved.number, saved.status.value)

        self._data.update_local_data(Collection.QUOTES, CacheOperation.UPDATE, saved, saved.id)
        await reconcile(self._data, Collection.QUOTES)
        return saved


def _finalize_totals(quote: Quote) -> None:
    if not quote.services and not quote.products:
        raise BusinessRuleError("A quote needs at least one service or product")
    quote.recalculate()
    if quote.discount > quote.subtotal:
        raise BusinessRuleError(
            f"Discount {quote.discount:.2f} exceeds subtotal {quote.subtotal:.2f}"
        )
