"""Unit tests for the ClientService."""

import asyncio

import pytest

from bizdesk.application.schemas import ClientCreate, ClientUpdate
from bizdesk.application.services import ClientService, Collection
from bizdesk.domain.entities import ClientType, Quote
from bizdesk.domain.exceptions import (
    BusinessRuleError,
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
)
from bizdesk.infrastructure.dependencies import build_data_manager

from conftest import CNPJ, CPF, CPF_OTHER, GatedReadStore, make_client


@pytest.fixture
def service(store, data_manager) -> ClientService:
    return ClientService(store, data_manager)


def _create(**overrides) -> ClientCreate:
    fields = {
        "type": "individual",
        "name": "Maria Souza",
        "document": "529.982.247-25",
        "email": "Maria@Example.com",
        "phone": "(41) 99999-0000",
        "city": "Curitiba",
        "state": "pr",
    }
    fields.update(overrides)
    return ClientCreate(**fields)


@pytest.mark.asyncio
async def test_create_client_normalizes_and_caches(service, store, data_manager):
    client = await service.create_client(_create())

    assert client.document == CPF
    assert client.email == "maria@example.com"
    assert client.state == "PR"
    assert client.phone == "41999990000"
    assert store.clients == [client]
    assert data_manager.get_data(Collection.CLIENTS)[0].id == client.id
    assert data_manager.is_loaded(Collection.CLIENTS)


@pytest.mark.asyncio
async def test_create_organization_requires_valid_cnpj(service):
    client = await service.create_client(
        _create(type="organization", name="ACME Ltda", document="11.222.333/0001-81", email=None)
    )
    assert client.type == ClientType.ORGANIZATION
    assert client.document == CNPJ

    with pytest.raises(BusinessRuleError, match="CNPJ"):
        await service.create_client(
            _create(type="organization", document="11.222.333/0001-80", email=None)
        )


@pytest.mark.asyncio
async def test_create_rejects_invalid_cpf(service, store):
    with pytest.raises(BusinessRuleError, match="CPF"):
        await service.create_client(_create(document="123.456.789-00"))
    assert store.clients == []


@pytest.mark.asyncio
async def test_create_rejects_duplicate_document_and_email(service):
    await service.create_client(_create())

    with pytest.raises(DuplicateEntityError, match="document"):
        await service.create_client(_create(email="other@example.com"))
    with pytest.raises(DuplicateEntityError, match="email"):
        await service.create_client(_create(document=CPF_OTHER))


@pytest.mark.asyncio
async def test_list_clients_search(service):
    await service.create_client(_create())
    await service.create_client(_create(name="João Lima", document=CPF_OTHER, email="joao@example.com"))

    assert [c.name for c in await service.list_clients(search="joão")] == ["João Lima"]
    assert len(await service.list_clients()) == 2


@pytest.mark.asyncio
async def test_get_client_not_found(service):
    with pytest.raises(EntityNotFoundError):
        await service.get_client("missing")


@pytest.mark.asyncio
async def test_update_client_keeps_untouched_fields(service, store):
    created = await service.create_client(_create())

    updated = await service.update_client(created.id, ClientUpdate(city="Londrina"))

    assert updated.city == "Londrina"
    assert updated.name == "Maria Souza"
    assert store.clients[0].city == "Londrina"


@pytest.mark.asyncio
async def test_update_client_to_taken_document_is_refused(service):
    await service.create_client(_create())
    other = await service.create_client(_create(document=CPF_OTHER, email="b@example.com"))

    with pytest.raises(DuplicateEntityError):
        await service.update_client(other.id, ClientUpdate(document=CPF))


@pytest.mark.asyncio
async def test_delete_client(service, store, data_manager):
    created = await service.create_client(_create())

    await service.delete_client(created.id)

    assert store.clients == []
    assert data_manager.get_data(Collection.CLIENTS) == []


@pytest.mark.asyncio
async def test_delete_client_with_quotes_is_refused(service, store):
    created = await service.create_client(_create())
    store.quotes.append(Quote(client_id=created.id, number="ORC0001"))

    with pytest.raises(EntityInUseError):
        await service.delete_client(created.id)
    assert len(store.clients) == 1


@pytest.mark.asyncio
async def test_write_survives_failed_reconcile(service, store, data_manager):
    await service.list_clients()
    store.fail_reads = True

    created = await service.create_client(_create())

    assert store.clients == [created]
    assert data_manager.get_data(Collection.CLIENTS) == [created]


@pytest.mark.asyncio
async def test_reads_arriving_during_first_load_wait_for_it():
    store = GatedReadStore()
    client = make_client()
    store.clients.append(client)
    service = ClientService(store, build_data_manager(store))

    first = asyncio.create_task(service.get_client(client.id))
    second = asyncio.create_task(service.list_clients())
    await asyncio.sleep(0)
    store.gate.set()

    found, listed = await asyncio.gather(first, second)

    assert found.id == client.id
    assert [c.id for c in listed] == [client.id]
    assert store.fetches["clients"] == 1


@pytest.mark.asyncio
async def test_read_retries_when_the_load_it_waited_for_failed():
    store = GatedReadStore()
    client = make_client()
    store.clients.append(client)
    data_manager = build_data_manager(store)
    service = ClientService(store, data_manager)

    store.failures = 1
    failing = asyncio.create_task(data_manager.load_data(Collection.CLIENTS))
    await asyncio.sleep(0)
    reader = asyncio.create_task(service.get_client(client.id))
    await asyncio.sleep(0)

    store.gate.set()
    with pytest.raises(ConnectionError):
        await failing

    assert (await reader).id == client.id
    assert store.fetches["clients"] == 2
