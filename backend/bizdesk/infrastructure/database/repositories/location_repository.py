"""Concrete repositories for states and cities backed by SQLAlchemy."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.domain.entities import City, State
from bizdesk.infrastructure.database.models import CityModel, StateModel
from bizdesk.infrastructure.database.repositories.client_repository import as_utc


def state_to_entity(model: StateModel) -> State:
    return State(
        id=model.id,
        name=model.name,
        code=model.code,
        created_at=as_utc(model.created_at),
    )


class SQLAlchemyStateRepository:
    """State persistence within a caller-owned session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_all(self) -> list[State]:
        result = await self._session.execute(select(StateModel).order_by(StateModel.name))
        return [state_to_entity(row) for row in result.scalars().all()]

    async def create(self, state: State) -> State:
        model = StateModel(
            id=state.id,
            name=state.name,
            code=state.code,
            created_at=state.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return state_to_entity(model)

    async def update(self, state: State) -> State:
        model = await self._session.get(StateModel, state.id)
        if model is None:
            raise ValueError(f"State {state.id} not found in database")
        model.name = state.name
        model.code = state.code
        await self._session.flush()
        return state_to_entity(model)

    async def delete(self, state_id: str) -> bool:
        model = await self._session.get(StateModel, state_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def exists_with(
        self,
        *,
        name: str | None = None,
        code: str | None = None,
        exclude_id: str | None = None,
    ) -> bool:
        stmt = select(StateModel.id)
        if name is not None:
            stmt = stmt.where(func.lower(StateModel.name) == name.lower())
        if code is not None:
            stmt = stmt.where(StateModel.code == code.upper())
        if exclude_id is not None:
            stmt = stmt.where(StateModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def count_cities(self, state_id: str) -> int:
        count = await self._session.scalar(
            select(func.count()).select_from(CityModel).where(CityModel.state_id == state_id)
        )
        return count or 0


class SQLAlchemyCityRepository:
    """City persistence within a caller-owned session. The state is loaded alongside."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CityModel) -> City:
        return City(
            id=model.id,
            name=model.name,
            state_id=model.state_id,
            state=state_to_entity(model.state) if model.state else None,
            created_at=as_utc(model.created_at),
        )

    async def _reload(self, city_id: str) -> CityModel:
        stmt = (
            select(CityModel)
            .where(CityModel.id == city_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def get_all(self) -> list[City]:
        result = await self._session.execute(select(CityModel).order_by(CityModel.name))
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, city: City) -> City:
        model = CityModel(
            id=city.id,
            name=city.name,
            state_id=city.state_id,
            created_at=city.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(await self._reload(model.id))

    async def update(self, city: City) -> City:
        model = await self._session.get(CityModel, city.id)
        if model is None:
            raise ValueError(f"City {city.id} not found in database")
        model.name = city.name
        model.state_id = city.state_id
        await self._session.flush()
        return self._to_entity(await self._reload(model.id))

    async def delete(self, city_id: str) -> bool:
        model = await self._session.get(CityModel, city_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def exists_with(self, name: str, state_id: str, exclude_id: str | None = None) -> bool:
        stmt = select(CityModel.id).where(
            func.lower(CityModel.name) == name.lower(),
            CityModel.state_id == state_id,
        )
        if exclude_id is not None:
            stmt = stmt.where(CityModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None
