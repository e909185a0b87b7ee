"""Application service (use case) for client registry operations."""

import logging
from dataclasses import replace

from bizdesk.application.interfaces import BusinessStore
from bizdesk.application.schemas.client import ClientCreate, ClientUpdate
from bizdesk.application.services.cache_sync import ensure_loaded, reconcile
from bizdesk.application.services.data_manager import CacheOperation, Collection, DataManager
from bizdesk.domain.entities import Client, ClientType
from bizdesk.domain.exceptions import (
    BusinessRuleError,
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
)
from bizdesk.domain.validators import validate_document

logger = logging.getLogger(__name__)


class ClientService:
    """Orchestrates client CRUD. Reads come from the cache, writes go to the store first."""

    def __init__(self, store: BusinessStore, data_manager: DataManager):
        self._store = store
        self._data = data_manager

    async def list_clients(self, search: str | None = None) -> list[Client]:
        clients: list[Client] = await ensure_loaded(self._data, Collection.CLIENTS)
        if search:
            needle = search.casefold()
            clients = [
                c for c in clients
                if needle in c.name.casefold() or needle in c.document or needle in c.email
            ]
        return clients

    async def get_client(self, client_id: str) -> Client:
        clients: list[Client] = await ensure_loaded(self._data, Collection.CLIENTS)
        for client in clients:
            if client.id == client_id:
                return client
        raise EntityNotFoundError("Client", client_id)

    async def create_client(self, data: ClientCreate) -> Client:
        _check_document(data.document, data.type)
        await self._check_unique(data.document, data.email)

        client = Client(
            type=data.type,
            name=data.name,
            document=data.document,
            email=data.email or "",
            phone=data.phone,
            address=data.address,
            number=data.number,
            neighborhood=data.neighborhood,
            city=data.city,
            state=data.state,
            zip_code=data.zip_code,
        )
        created = await self._store.add_client(client)
        logger.info("Created client %s (%s)", created.id, created.name)

        self._data.update_local_data(Collection.CLIENTS, CacheOperation.ADD, created)
        await reconcile(self._data, Collection.CLIENTS)
        return created

    async def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        current = await self.get_client(client_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        updated = replace(current, **changes)

        if "document" in changes or "type" in changes:
            _check_document(updated.document, updated.type)
        await self._check_unique(
            updated.document if updated.document != current.document else None,
            updated.email if updated.email != current.email else None,
            exclude_id=client_id,
        )

        saved = await self._store.update_client(updated)
        logger.info("Updated client %s", client_id)

        self._data.update_local_data(Collection.CLIENTS, CacheOperation.UPDATE, saved, client_id)
        # Quotes and orders embed a copy of the client
        await reconcile(self._data, Collection.CLIENTS, Collection.QUOTES, Collection.ORDERS)
        return saved

    async def delete_client(self, client_id: str) -> None:
        await self.get_client(client_id)
        references = await self._store.count_client_references(client_id)
        if references:
            raise EntityInUseError("Client", client_id, references)

        deleted = await self._store.delete_client(client_id)
        if not deleted:
            raise EntityNotFoundError("Client", client_id)
        logger.info("Deleted client %s", client_id)

        self._data.update_local_data(Collection.CLIENTS, CacheOperation.DELETE, None, client_id)
        await reconcile(self._data, Collection.CLIENTS)

    async def _check_unique(
        self,
        document: str | None,
        email: str | None,
        exclude_id: str | None = None,
    ) -> None:
        if document and not await self._store.is_document_unique(document, exclude_id):
            raise DuplicateEntityError("Client", "document", document)
        if email and not await self._store.is_email_unique(email, exclude_id):
            raise DuplicateEntityError("Client", "email", email)


def _check_document(document: str, client_type: ClientType) -> None:
    if not validate_document(document, client_type):
        label = "CPF" if client_type == ClientType.INDIVIDUAL else "CNPJ"
        raise BusinessRuleError(f"Invalid {label}: {document}")
