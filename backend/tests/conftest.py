"""Shared fixtures: an in-memory BusinessStore and a DataManager wired to it."""

import asyncio
from collections import Counter
from dataclasses import replace

import pytest

from bizdesk.application.interfaces import BusinessStore, CounterKind
from bizdesk.application.services import DataManager
from bizdesk.domain.entities import (
    City,
    Client,
    ClientType,
    CompanySettings,
    Counters,
    Order,
    Quote,
    State,
)
from bizdesk.infrastructure.dependencies import build_data_manager


class FakeBusinessStore(BusinessStore):
    """In-memory fake store for unit testing.

    Lists are kept newest first. Quotes and orders come back with their
    client attached, like the SQL store. Set ``fail_reads`` to make every
    list read raise.
    """

    def __init__(self):
        self.clients: list[Client] = []
        self.quotes: list[Quote] = []
        self.orders: list[Order] = []
        self.company: CompanySettings | None = None
        self.counters = Counters()
        self.states: list[State] = []
        self.cities: list[City] = []
        self.fetches: Counter[str] = Counter()
        self.fail_reads = False

    def _read(self, name: str) -> None:
        self.fetches[name] += 1
        if self.fail_reads:
            raise ConnectionError(f"store unavailable while reading {name}")

    def _client(self, client_id: str) -> Client | None:
        return next((c for c in self.clients if c.id == client_id), None)

    @staticmethod
    def _replace_in(items: list, item) -> None:
        for index, existing in enumerate(items):
            if existing.id == item.id:
                items[index] = item
                return
        raise ValueError(f"{item.id} not found")

    # Clients

    async def get_clients(self) -> list[Client]:
        self._read("clients")
        return list(self.clients)

    async def add_client(self, client: Client) -> Client:
        self.clients.insert(0, client)
        return client

    async def update_client(self, client: Client) -> Client:
        self._replace_in(self.clients, client)
        return client

    async def delete_client(self, client_id: str) -> bool:
        before = len(self.clients)
        self.clients = [c for c in self.clients if c.id != client_id]
        return len(self.clients) < before

    async def is_document_unique(self, document: str, exclude_id: str | None = None) -> bool:
        return not any(c.document == document and c.id != exclude_id for c in self.clients)

    async def is_email_unique(self, email: str, exclude_id: str | None = None) -> bool:
        return not any(
            c.email.lower() == email.lower() and c.id != exclude_id for c in self.clients
        )

    async def count_client_references(self, client_id: str) -> int:
        return sum(1 for q in self.quotes if q.client_id == client_id) + sum(
            1 for o in self.orders if o.client_id == client_id
        )

    # Quotes

    async def get_quotes(self) -> list[Quote]:
        self._read("quotes")
        return [replace(q, client=self._client(q.client_id)) for q in self.quotes]

    async def add_quote(self, quote: Quote) -> Quote:
        self.quotes.insert(0, quote)
        return replace(quote, client=self._client(quote.client_id))

    async def update_quote(self, quote: Quote) -> Quote:
        self._replace_in(self.quotes, quote)
        return replace(quote, client=self._client(quote.client_id))

    async def delete_quote(self, quote_id: str) -> bool:
        before = len(self.quotes)
        self.quotes = [q for q in self.quotes if q.id != quote_id]
        return len(self.quotes) < before

    # Orders

    async def get_orders(self) -> list[Order]:
        self._read("orders")
        return [replace(o, client=self._client(o.client_id)) for o in self.orders]

    async def add_order(self, order: Order) -> Order:
        self.orders.insert(0, order)
        return replace(order, client=self._client(order.client_id))

    async def update_order(self, order: Order) -> Order:
        self._replace_in(self.orders, order)
        return replace(order, client=self._client(order.client_id))

    async def delete_order(self, order_id: str) -> bool:
        before = len(self.orders)
        self.orders = [o for o in self.orders if o.id != order_id]
        return len(self.orders) < before

    # Company settings & counters

    async def get_company_settings(self) -> CompanySettings | None:
        self._read("company_settings")
        return self.company

    async def save_company_settings(self, settings: CompanySettings) -> CompanySettings:
        self.company = settings
        return settings

    async def get_counters(self) -> Counters:
        return replace(self.counters)

    async def reserve_number(self, kind: CounterKind) -> int:
        value = getattr(self.counters, kind)
        setattr(self.counters, kind, value + 1)
        return value

    # Locations

    def _state(self, state_id: str) -> State | None:
        return next((s for s in self.states if s.id == state_id), None)

    async def get_states(self) -> list[State]:
        self._read("states")
        return sorted(self.states, key=lambda s: s.name)

    async def add_state(self, state: State) -> State:
        self.states.append(state)
        return state

    async def update_state(self, state: State) -> State:
        self._replace_in(self.states, state)
        return state

    async def delete_state(self, state_id: str) -> bool:
        before = len(self.states)
        self.states = [s for s in self.states if s.id != state_id]
        return len(self.states) < before

    async def is_state_name_unique(self, name: str, exclude_id: str | None = None) -> bool:
        return not any(
            s.name.lower() == name.lower() and s.id != exclude_id for s in self.states
        )

    async def is_state_code_unique(self, code: str, exclude_id: str | None = None) -> bool:
        return not any(s.code == code.upper() and s.id != exclude_id for s in self.states)

    async def count_state_cities(self, state_id: str) -> int:
        return sum(1 for c in self.cities if c.state_id == state_id)

    async def get_cities(self) -> list[City]:
        self._read("cities")
        return sorted(
            (replace(c, state=self._state(c.state_id)) for c in self.cities),
            key=lambda c: c.name,
        )

    async def add_city(self, city: City) -> City:
        self.cities.append(city)
        return replace(city, state=self._state(city.state_id))

    async def update_city(self, city: City) -> City:
        self._replace_in(self.cities, city)
        return replace(city, state=self._state(city.state_id))

    async def delete_city(self, city_id: str) -> bool:
        before = len(self.cities)
        self.cities = [c for c in self.cities if c.id != city_id]
        return len(self.cities) < before

    async def is_city_name_unique(
        self, name: str, state_id: str, exclude_id: str | None = None
    ) -> bool:
        return not any(
            c.name.lower() == name.lower() and c.state_id == state_id and c.id != exclude_id
            for c in self.cities
        )


class YieldingStore(FakeBusinessStore):
    """Suspends before every write, as a store behind a network hop does."""

    async def reserve_number(self, kind: CounterKind) -> int:
        await asyncio.sleep(0)
        return await super().reserve_number(kind)

    async def add_quote(self, quote: Quote) -> Quote:
        await asyncio.sleep(0)
        return await super().add_quote(quote)

    async def add_order(self, order: Order) -> Order:
        await asyncio.sleep(0)
        return await super().add_order(order)


class GatedReadStore(FakeBusinessStore):
    """Holds every client read until ``gate`` is set; the first ``failures`` reads then raise."""

    def __init__(self):
        super().__init__()
        self.gate = asyncio.Event()
        self.failures = 0

    async def get_clients(self) -> list[Client]:
        await self.gate.wait()
        if self.failures:
            self.failures -= 1
            self.fetches["clients"] += 1
            raise ConnectionError("store unavailable while reading clients")
        return await super().get_clients()


# Valid documents used across the suite
CPF = "52998224725"
CPF_OTHER = "11144477735"
CNPJ = "11222333000181"


def make_client(**overrides) -> Client:
    fields = {
        "type": ClientType.INDIVIDUAL,
        "name": "Maria Souza",
        "document": CPF,
        "email": "maria@example.com",
        "city": "Curitiba",
        "state": "PR",
    }
    fields.update(overrides)
    return Client(**fields)


@pytest.fixture
def store() -> FakeBusinessStore:
    return FakeBusinessStore()


@pytest.fixture
def data_manager(store: FakeBusinessStore) -> DataManager:
    return build_data_manager(store)


@pytest.fixture
def client_factory():
    return make_client
