"""Application service for the state and city registry.

Locations are reference data edited rarely and read straight from the
store; they are not part of the DataManager's cached collections.
"""

import logging
from dataclasses import replace

from bizdesk.application.interfaces import BusinessStore
from bizdesk.application.schemas.location import CityCreate, CityUpdate, StateCreate, StateUpdate
from bizdesk.domain.entities import City, State
from bizdesk.domain.exceptions import DuplicateEntityError, EntityInUseError, EntityNotFoundError

logger = logging.getLogger(__name__)


class LocationService:
    """CRUD for states and cities.

    A state name and UF code are unique; a city name is unique within its
    state. A state that still has cities cannot be deleted.
    """

    def __init__(self, store: BusinessStore):
        self._store = store

    # ── States ──────────────────────────────────────────────────────

    async def list_states(self, search: str | None = None) -> list[State]:
        states = await self._store.get_states()
        if search:
            needle = search.casefold()
            states = [
                s for s in states
                if needle in s.name.casefold() or needle in s.code.casefold()
            ]
        return states

    async def get_state(self, state_id: str) -> State:
        for state in await self._store.get_states():
            if state.id == state_id:
                return state
        raise EntityNotFoundError("State", state_id)

    async def create_state(self, data: StateCreate) -> State:
        await self._check_state_unique(data.name, data.code)
        created = await self._store.add_state(State(name=data.name, code=data.code))
        logger.info("Created state %s (%s)", created.code, created.name)
        return created

    async def update_state(self, state_id: str, data: StateUpdate) -> State:
        current = await self.get_state(state_id)
        updated = replace(current, **data.model_dump(exclude_unset=True, exclude_none=True))
        await self._check_state_unique(
            updated.name if updated.name.casefold() != current.name.casefold() else None,
            updated.code if updated.code != current.code else None,
            exclude_id=state_id,
        )
        saved = await self._store.update_state(updated)
        logger.info("Updated state %s", saved.code)
        return saved

    async def delete_state(self, state_id: str) -> None:
        await self.get_state(state_id)
        linked = await self._store.count_state_cities(state_id)
        if linked:
            raise EntityInUseError("State", state_id, linked)

        if not await self._store.delete_state(state_id):
            raise EntityNotFoundError("State", state_id)
        logger.info("Deleted state %s", state_id)

    # ── Cities ──────────────────────────────────────────────────────

    async def list_cities(
        self,
        state_id: str | None = None,
        state_code: str | None = None,
        search: str | None = None,
    ) -> list[City]:
        cities = await self._store.get_cities()
        if state_id:
            cities = [c for c in cities if c.state_id == state_id]
        if state_code:
            code = state_code.upper()
            cities = [c for c in cities if c.state is not None and c.state.code == code]
        if search:
            needle = search.casefold()
            cities = [
                c for c in cities
                if needle in c.name.casefold()
                or (c.state is not None and needle in c.state.name.casefold())
            ]
        return cities

    async def get_city(self, city_id: str) -> City:
        for city in await self._store.get_cities():
            if city.id == city_id:
                return city
        raise EntityNotFoundError("City", city_id)

    async def create_city(self, data: CityCreate) -> City:
        state = await self.get_state(data.state_id)
        await self._check_city_unique(data.name, state.id)
        created = await self._store.add_city(City(name=data.name, state_id=state.id))
        logger.info("Created city %s/%s", created.name, state.code)
        return created

    async def update_city(self, city_id: str, data: CityUpdate) -> City:
        current = await self.get_city(city_id)
        updated = replace(current, **data.model_dump(exclude_unset=True, exclude_none=True))
        if updated.state_id != current.state_id:
            updated.state = await self.get_state(updated.state_id)
        if (
            updated.state_id != current.state_id
            or updated.name.casefold() != current.name.casefold()
        ):
            await self._check_city_unique(updated.name, updated.state_id, exclude_id=city_id)

        saved = await self._store.update_city(updated)
        logger.info("Updated city %s", city_id)
        return saved

    async def delete_city(self, city_id: str) -> None:
        await self.get_city(city_id)
        if not await self._store.delete_city(city_id):
            raise EntityNotFoundError("City", city_id)
        logger.info("Deleted city %s", city_id)

    # ── Helpers ─────────────────────────────────────────────────────

    async def _check_state_unique(
        self,
        name: str | None,
        code: str | None,
        exclude_id: str | None = None,
    ) -> None:
        if name and not await self._store.is_state_name_unique(name, exclude_id):
            raise DuplicateEntityError("State", "name", name)
        if code and not await self._store.is_state_code_unique(code, exclude_id):
            raise DuplicateEntityError("State", "code", code)

    async def _check_city_unique(
        self, name: str, state_id: str, exclude_id: str | None = None
    ) -> None:
        if not await self._store.is_city_name_unique(name, state_id, exclude_id):
            raise DuplicateEntityError("City", "name", name)
