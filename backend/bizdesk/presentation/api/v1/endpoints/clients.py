"""Client CRUD endpoints."""

from fastapi import APIRouter, Depends, Query, status

from bizdesk.application.schemas import ClientCreate, ClientResponse, ClientUpdate
from bizdesk.application.services import ClientService
from bizdesk.infrastructure.dependencies import get_client_service
from bizdesk.presentation.api.v1.errors import DOMAIN_ERRORS, http_error

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=list[ClientResponse])
async def list_clients(
    search: str | None = Query(None, description="Match on name, document or e-mail"),
    service: ClientService = Depends(get_client_service),
) -> list[ClientResponse]:
    """List every client, most recent first."""
    clients = await service.list_clients(search=search)
    return [ClientResponse.model_validate(c, from_attributes=True) for c in clients]


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    service: ClientService = Depends(get_client_service),
) -> ClientResponse:
    try:
        client = await service.get_client(client_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    service: ClientService = Depends(get_client_service),
) -> ClientResponse:
    """Register a client. The CPF/CNPJ must be valid and unused."""
    try:
        client = await service.create_client(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
) -> ClientResponse:
    try:
        client = await service.update_client(client_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: str,
    service: ClientService = Depends(get_client_service),
) -> None:
    """Delete a client that no quote or order refers to."""
    try:
        await service.delete_client(client_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
