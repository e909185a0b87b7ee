"""Concrete repository for Client backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.domain.entities import Client, ClientType
from bizdesk.infrastructure.database.models import ClientModel, OrderModel, QuoteModel


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def client_to_entity(model: ClientModel) -> Client:
    """Map ORM model → domain entity."""
    return Client(
        id=model.id,
        type=ClientType(model.type),
        name=model.name,
        document=model.document,
        email=model.email,
        phone=model.phone,
        address=model.address,
        number=model.number,
        neighborhood=model.neighborhood,
        city=model.city,
        state=model.state,
        zip_code=model.zip_code,
        created_at=as_utc(model.created_at),
    )


class SQLAlchemyClientRepository:
    """Client persistence within a caller-owned session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_model(self, entity: Client) -> ClientModel:
        """Map domain entity → ORM model (for creation)."""
        return ClientModel(
            id=entity.id,
            type=entity.type.value,
            name=entity.name,
            document=entity.document,
            email=entity.email,
            phone=entity.phone,
            address=entity.address,
            number=entity.number,
            neighborhood=entity.neighborhood,
            city=entity.city,
            state=entity.state,
            zip_code=entity.zip_code,
            created_at=entity.created_at,
        )

    async def get_all(self) -> list[Client]:
        stmt = select(ClientModel).order_by(ClientModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [client_to_entity(row) for row in result.scalars().all()]

    async def create(self, client: Client) -> Client:
        model = self._to_model(client)
        self._session.add(model)
        await self._session.flush()
        return client_to_entity(model)

    async def update(self, client: Client) -> Client:
        model = await self._session.get(ClientModel, client.id)
        if model is None:
            raise ValueError(f"Client {client.id} not found in database")
        model.type = client.type.value
        model.name = client.name
        model.document = client.document
        model.email = client.email
        model.phone = client.phone
        model.address = client.address
        model.number = client.number
        model.neighborhood = client.neighborhood
        model.city = client.city
        model.state = client.state
        model.zip_code = client.zip_code
        await self._session.flush()
        return client_to_entity(model)

    async def delete(self, client_id: str) -> bool:
        model = await self._session.get(ClientModel, client_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def exists_with(
        self,
        *,
        document: str | None = None,
        email: str | None = None,
        exclude_id: str | None = None,
    ) -> bool:
        stmt = select(ClientModel.id)
        if document is not None:
            stmt = stmt.where(ClientModel.document == document)
        if email is not None:
            stmt = stmt.where(func.lower(ClientModel.email) == email.lower())
        if exclude_id is not None:
            stmt = stmt.where(ClientModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def count_references(self, client_id: str) -> int:
        quotes = await self._session.scalar(
            select(func.count()).select_from(QuoteModel).where(QuoteModel.client_id == client_id)
        )
        orders = await self._session.scalar(
            select(func.count()).select_from(OrderModel).where(OrderModel.client_id == client_id)
        )
        return (quotes or 0) + (orders or 0)
