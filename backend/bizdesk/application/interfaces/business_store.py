"""Abstract store interface (port) — the remote relational store behind the cache and services."""

from abc import ABC, abstractmethod
from typing import Literal

from bizdesk.domain.entities import City, Client, CompanySettings, Counters, Order, Quote, State

CounterKind = Literal["quote", "order"]


class BusinessStore(ABC):
    """Port for persistence of every business collection.

    Each call is an independent, committed unit of work. List reads return
    the full collection, most recently created first, except locations which
    come back sorted by name.
    """

    # ── Clients ─────────────────────────────────────────────────────

    @abstractmethod
    async def get_clients(self) -> list[Client]:
        ...

    @abstractmethod
    async def add_client(self, client: Client) -> Client:
        ...

    @abstractmethod
    async def update_client(self, client: Client) -> Client:
        ...

    @abstractmethod
    async def delete_client(self, client_id: str) -> bool:
        """Delete a client. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def is_document_unique(self, document: str, exclude_id: str | None = None) -> bool:
        ...

    @abstractmethod
    async def is_email_unique(self, email: str, exclude_id: str | None = None) -> bool:
        ...

    @abstractmethod
    async def count_client_references(self, client_id: str) -> int:
        """Number of quotes and orders pointing at the client."""
        ...

    # ── Quotes ──────────────────────────────────────────────────────

    @abstractmethod
    async def get_quotes(self) -> list[Quote]:
        ...

    @abstractmethod
    async def add_quote(self, quote: Quote) -> Quote:
        ...

    @abstractmethod
    async def update_quote(self, quote: Quote) -> Quote:
        ...

    @abstractmethod
    async def delete_quote(self, quote_id: str) -> bool:
        ...

    # ── Orders ──────────────────────────────────────────────────────

    @abstractmethod
    async def get_orders(self) -> list[Order]:
        ...

    @abstractmethod
    async def add_order(self, order: Order) -> Order:
        ...

    @abstractmethod
    async def update_order(self, order: Order) -> Order:
        ...

    @abstractmethod
    async def delete_order(self, order_id: str) -> bool:
        ...

    # ── Company settings & counters ─────────────────────────────────

    @abstractmethod
    async def get_company_settings(self) -> CompanySettings | None:
        ...

    @abstractmethod
    async def save_company_settings(self, settings: CompanySettings) -> CompanySettings:
        """Insert or replace the singleton settings record."""
        ...

    @abstractmethod
    async def get_counters(self) -> Counters:
        ...

    @abstractmethod
    async def reserve_number(self, kind: CounterKind) -> int:
        """Take the counter's current value and advance it, as one atomic step.

        Returns the value taken. Concurrent callers never receive the same
        value; a reserved value that ends up unused is skipped for good.
        """
        ...

    # ── Locations ───────────────────────────────────────────────────
    # States and cities are listed alphabetically by name.

    @abstractmethod
    async def get_states(self) -> list[State]:
        ...

    @abstractmethod
    async def add_state(self, state: State) -> State:
        ...

    @abstractmethod
    async def update_state(self, state: State) -> State:
        ...

    @abstractmethod
    async def delete_state(self, state_id: str) -> bool:
        ...

    @abstractmethod
    async def is_state_name_unique(self, name: str, exclude_id: str | None = None) -> bool:
        """Case-insensitive."""
        ...

    @abstractmethod
    async def is_state_code_unique(self, code: str, exclude_id: str | None = None) -> bool:
        ...

    @abstractmethod
    async def count_state_cities(self, state_id: str) -> int:
        ...

    @abstractmethod
    async def get_cities(self) -> list[City]:
        """Every city, with its state attached."""
        ...

    @abstractmethod
    async def add_city(self, city: City) -> City:
        ...

    @abstractmethod
    async def update_city(self, city: City) -> City:
        ...

    @abstractmethod
    async def delete_city(self, city_id: str) -> bool:
        ...

    @abstractmethod
    async def is_city_name_unique(
        self, name: str, state_id: str, exclude_id: str | None = None
    ) -> bool:
        """Case-insensitive, within one state."""
        ...
