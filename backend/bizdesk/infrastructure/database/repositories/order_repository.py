"""Concrete repository for Order backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.domain.entities import Order, OrderStatus, ProductItem, ServiceItem
from bizdesk.infrastructure.database.models import OrderModel
from bizdesk.infrastructure.database.repositories.client_repository import (
    as_utc,
    client_to_entity,
)


class SQLAlchemyOrderRepository:
    """Order persistence within a caller-owned session. The client is loaded alongside."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: OrderModel) -> Order:
        return Order(
            id=model.id,
            number=model.number,
            client_id=model.client_id,
            client=client_to_entity(model.client) if model.client else None,
            services=[ServiceItem.from_dict(s) for s in model.services or []],
            products=[ProductItem.from_dict(p) for p in model.products or []],
            total=model.total,
            status=OrderStatus(model.status),
            quote_id=model.quote_id,
            is_from_quote=model.is_from_quote,
            created_at=as_utc(model.created_at),
            completed_at=as_utc(model.completed_at) if model.completed_at else None,
        )

    def _apply(self, model: OrderModel, entity: Order) -> None:
        model.number = entity.number
        model.client_id = entity.client_id
        model.quote_id = entity.quote_id
        model.is_from_quote = entity.is_from_quote
        model.services = [s.to_dict() for s in entity.services]
        model.products = [p.to_dict() for p in entity.products]
        model.total = entity.total
        model.status = entity.status.value
        model.completed_at = entity.completed_at

    async def _reload(self, order_id: str) -> OrderModel:
        stmt = (
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def get_all(self) -> list[Order]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, order: Order) -> Order:
        model = OrderModel(id=order.id, created_at=order.created_at)
        self._apply(model, order)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(await self._reload(model.id))

    async def update(self, order: Order) -> Order:
        model = await self._session.get(OrderModel, order.id)
        if model is None:
            raise ValueError(f"Order {order.id} not found in database")
        self._apply(model, order)
        await self._session.flush()
        return self._to_entity(await self._reload(model.id))

    async def delete(self, order_id: str) -> bool:
        model = await self._session.get(OrderModel, order_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
