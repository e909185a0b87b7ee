"""BusinessStore implementation over SQLAlchemy async sessions.

Every method runs in its own session and commits before returning, so a
reload issued right after a write always observes it.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bizdesk.application.interfaces import BusinessStore, CounterKind
from bizdesk.domain.entities import City, Client, CompanySettings, Counters, Order, Quote, State
from bizdesk.infrastructure.database.repositories.client_repository import (
    SQLAlchemyClientRepository,
)
from bizdesk.infrastructure.database.repositories.company_settings_repository import (
    SQLAlchemyCompanySettingsRepository,
)
from bizdesk.infrastructure.database.repositories.location_repository import (
    SQLAlchemyCityRepository,
    SQLAlchemyStateRepository,
)
from bizdesk.infrastructure.database.repositories.order_repository import (
    SQLAlchemyOrderRepository,
)
from bizdesk.infrastructure.database.repositories.quote_repository import (
    SQLAlchemyQuoteRepository,
)
from bizdesk.infrastructure.database.session import unit_of_work

logger = logging.getLogger(__name__)


class SQLAlchemyBusinessStore(BusinessStore):
    """Implements the BusinessStore port on top of a session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    # ── Clients ─────────────────────────────────────────────────────

    async def get_clients(self) -> list[Client]:
        async with unit_of_work(self._session_factory) as session:
            clients = await SQLAlchemyClientRepository(session).get_all()
        logger.debug("Fetched %d clients", len(clients))
        return clients

    async def add_client(self, client: Client) -> Client:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyClientRepository(session).create(client)

    async def update_client(self, client: Client) -> Client:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyClientRepository(session).update(client)

    async def delete_client(self, client_id: str) -> bool:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyClientRepository(session).delete(client_id)

    async def is_document_unique(self, document: str, exclude_id: str | None = None) -> bool:
        async with unit_of_work(self._session_factory) as session:
            taken = await SQLAlchemyClientRepository(session).exists_with(
                document=document, exclude_id=exclude_id
            )
        return not taken

    async def is_email_unique(self, email: str, exclude_id: str | None = None) -> bool:
        async with unit_of_work(self._session_factory) as session:
            taken = await SQLAlchemyClientRepository(session).exists_with(
                email=email, exclude_id=exclude_id
            )
        return not taken

    async def count_client_references(self, client_id: str) -> int:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyClientRepository(session).count_references(client_id)

    # ── Quotes ──────────────────────────────────────────────────────

    async def get_quotes(self) -> list[Quote]:
        async with unit_of_work(self._session_factory) as session:
            quotes = await SQLAlchemyQuoteRepository(session).get_all()
        logger.debug("Fetched %d quotes", len(quotes))
        return quotes

    async def add_quote(self, quote: Quote) -> Quote:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyQuoteRepository(session).create(quote)

    async def update_quote(self, quote: Quote) -> Quote:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyQuoteRepository(session).update(quote)

    async def delete_quote(self, quote_id: str) -> bool:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyQuoteRepository(session).delete(quote_id)

    # ── Orders ──────────────────────────────────────────────────────

    async def get_orders(self) -> list[Order]:
        async with unit_of_work(self._session_factory) as session:
            orders = await SQLAlchemyOrderRepository(session).get_all()
        logger.debug("Fetched %d orders", len(orders))
        return orders

    async def add_order(self, order: Order) -> Order:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyOrderRepository(session).create(order)

    async def update_order(self, order: Order) -> Order:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyOrderRepository(session).update(order)

    async def delete_order(self, order_id: str) -> bool:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyOrderRepository(session).delete(order_id)

    # ── Company settings & counters ─────────────────────────────────

    async def get_company_settings(self) -> CompanySettings | None:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyCompanySettingsRepository(session).get()

    async def save_company_settings(self, settings: CompanySettings) -> CompanySettings:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyCompanySettingsRepository(session).save(settings)

    async def get_counters(self) -> Counters:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyCompanySettingsRepository(session).get_counters()

    async def reserve_number(self, kind: CounterKind) -> int:
        async with unit_of_work(self._session_factory) as session:
            value = await SQLAlchemyCompanySettingsRepository(session).reserve(kind)
        logger.debug("Reserved %s number %d", kind, value)
        return value

    # ── Locations ───────────────────────────────────────────────────

    async def get_states(self) -> list[State]:
        async with unit_of_work(self._session_factory) as session:
            states = await SQLAlchemyStateRepository(session).get_all()
        logger.debug("Fetched %d states", len(states))
        return states

    async def add_state(self, state: State) -> State:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyStateRepository(session).create(state)

    async def update_state(self, state: State) -> State:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyStateRepository(session).update(state)

    async def delete_state(self, state_id: str) -> bool:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyStateRepository(session).delete(state_id)

    async def is_state_name_unique(self, name: str, exclude_id: str | None = None) -> bool:
        async with unit_of_work(self._session_factory) as session:
            taken = await SQLAlchemyStateRepository(session).exists_with(
                name=name, exclude_id=exclude_id
            )
        return not taken

    async def is_state_code_unique(self, code: str, exclude_id: str | None = None) -> bool:
        async with unit_of_work(self._session_factory) as session:
            taken = await SQLAlchemyStateRepository(session).exists_with(
                code=code, exclude_id=exclude_id
            )
        return not taken

    async def count_state_cities(self, state_id: str) -> int:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyStateRepository(session).count_cities(state_id)

    async def get_cities(self) -> list[City]:
        async with unit_of_work(self._session_factory) as session:
            cities = await SQLAlchemyCityRepository(session).get_all()
        logger.debug("Fetched %d cities", len(cities))
        return cities

    async def add_city(self, city: City) -> City:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyCityRepository(session).create(city)

    async def update_city(self, city: City) -> City:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyCityRepository(session).update(city)

    async def delete_city(self, city_id: str) -> bool:
        async with unit_of_work(self._session_factory) as session:
            return await SQLAlchemyCityRepository(session).delete(city_id)

    async def is_city_name_unique(
        self, name: str, state_id: str, exclude_id: str | None = None
    ) -> bool:
        async with unit_of_work(self._session_factory) as session:
            taken = await SQLAlchemyCityRepository(session).exists_with(name, state_id, exclude_id)
        return not taken
