"""Unit tests for the OrderService."""

import asyncio

import pytest

from bizdesk.application.schemas import OrderCreate, ProductItemSchema, ServiceItemSchema
from bizdesk.application.services import Collection, OrderService
from bizdesk.domain.entities import OrderStatus
from bizdesk.domain.exceptions import (
    BusinessRuleError,
    EntityNotFoundError,
    InvalidStatusTransitionError,
)
from bizdesk.infrastructure.dependencies import build_data_manager

from conftest import YieldingStore


@pytest.fixture
def client(store, client_factory):
    client = client_factory()
    store.clients.append(client)
    return client


@pytest.fixture
def service(store, data_manager) -> OrderService:
    return OrderService(store, data_manager)


def _order(client_id: str) -> OrderCreate:
    return OrderCreate(
        client_id=client_id,
        services=[ServiceItemSchema(description="Manutenção", hours=1.5, hourly_rate=100)],
        products=[ProductItemSchema(description="Filtro", quantity=2, unit_price=25)],
    )


@pytest.mark.asyncio
async def test_create_manual_order(service, store, client):
    order = await service.create_order(_order(client.id))

    assert order.number == "PED0001"
    assert order.total == 200
    assert order.status == OrderStatus.PENDING
    assert not order.is_from_quote
    assert order.quote_id is None
    assert store.counters.order == 2


@pytest.mark.asyncio
async def test_order_needs_items(service, client):
    with pytest.raises(BusinessRuleError):
        await service.create_order(OrderCreate(client_id=client.id))


@pytest.mark.asyncio
async def test_completing_an_order_stamps_completion_date(service, client):
    order = await service.create_order(_order(client.id))

    in_progress = await service.update_order_status(order.id, OrderStatus.IN_PROGRESS)
    assert in_progress.completed_at is None

    completed = await service.update_order_status(order.id, OrderStatus.COMPLETED)
    assert completed.status == OrderStatus.COMPLETED
    assert completed.completed_at is not None


@pytest.mark.asyncio
async def test_terminal_status_cannot_change(service, client):
    order = await service.create_order(_order(client.id))
    await service.update_order_status(order.id, OrderStatus.CANCELLED)

    with pytest.raises(InvalidStatusTransitionError):
        await service.update_order_status(order.id, OrderStatus.PENDING)


@pytest.mark.asyncio
async def test_list_orders_by_status(service, client):
    first = await service.create_order(_order(client.id))
    await service.create_order(_order(client.id))
    await service.update_order_status(first.id, OrderStatus.COMPLETED)

    completed = await service.list_orders(status=OrderStatus.COMPLETED)

    assert [o.id for o in completed] == [first.id]
    assert len(await service.list_orders()) == 2


@pytest.mark.asyncio
async def test_delete_order(service, store, data_manager, client):
    order = await service.create_order(_order(client.id))

    await service.delete_order(order.id)

    assert store.orders == []
    assert data_manager.get_data(Collection.ORDERS) == []
    with pytest.raises(EntityNotFoundError):
        await service.delete_order(order.id)


@pytest.mark.asyncio
async def test_concurrent_manual_orders_get_distinct_numbers(client_factory):
    store = YieldingStore()
    client = client_factory()
    store.clients.append(client)
    service = OrderService(store, build_data_manager(store))

    orders = await asyncio.gather(*(service.create_order(_order(client.id)) for _ in range(3)))

    assert sorted(o.number for o in orders) == ["PED0001", "PED0002", "PED0003"]
    assert store.counters.order == 4
