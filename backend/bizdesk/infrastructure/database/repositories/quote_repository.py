"""Concrete repository for Quote backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.domain.entities import ProductItem, Quote, QuoteStatus, ServiceItem
from bizdesk.infrastructure.database.models import QuoteModel
from bizdesk.infrastructure.database.repositories.client_repository import (
    as_utc,
    client_to_entity,
)


class SQLAlchemyQuoteRepository:
    """Quote persistence within a caller-owned session. The client is loaded alongside."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: QuoteModel) -> Quote:
        return Quote(
            id=model.id,
            number=model.number,
            client_id=model.client_id,
            client=client_to_entity(model.client) if model.client else None,
            services=[ServiceItem.from_dict(s) for s in model.services or []],
            products=[ProductItem.from_dict(p) for p in model.products or []],
            discount=model.discount,
            subtotal=model.subtotal,
            total=model.total,
            status=QuoteStatus(model.status),
            valid_until=model.valid_until,
            notes=model.notes,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _apply(self, model: QuoteModel, entity: Quote) -> None:
        model.number = entity.number
        model.client_id = entity.client_id
        model.services = [s.to_dict() for s in entity.services]
        model.products = [p.to_dict() for p in entity.products]
        model.discount = entity.discount
        model.subtotal = entity.subtotal
        model.total = entity.total
        model.status = entity.status.value
        model.valid_until = entity.valid_until
        model.notes = entity.notes
        model.updated_at = entity.updated_at

    async def _reload(self, quote_id: str) -> QuoteModel:
        stmt = (
            select(QuoteModel)
            .where(QuoteModel.id == quote_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def get_all(self) -> list[Quote]:
        stmt = select(QuoteModel).order_by(QuoteModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, quote: Quote) -> Quote:
        model = QuoteModel(id=quote.id, created_at=quote.created_at)
        self._apply(model, quote)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(await self._reload(model.id))

    async def update(self, quote: Quote) -> Quote:
        model = await self._session.get(QuoteModel, quote.id)
        if model is None:
            raise ValueError(f"Quote {quote.id} not found in database")
        self._apply(model, quote)
        await self._session.flush()
        return self._to_entity(await self._reload(model.id))

    async def delete(self, quote_id: str) -> bool:
        model = await self._session.get(QuoteModel, quote_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
