"""State and city endpoints — the location registry behind address and report filters."""

from fastapi import APIRouter, Depends, Query, status

from bizdesk.application.schemas import (
    CityCreate,
    CityResponse,
    CityUpdate,
    StateCreate,
    StateResponse,
    StateUpdate,
)
from bizdesk.application.services import LocationService
from bizdesk.infrastructure.dependencies import get_location_service
from bizdesk.presentation.api.v1.errors import DOMAIN_ERRORS, http_error

router = APIRouter(tags=["Locations"])


# ── States ──────────────────────────────────────────────────────────


@router.get("/states", response_model=list[StateResponse])
async def list_states(
    search: str | None = Query(None, description="Match on name or UF code"),
    service: LocationService = Depends(get_location_service),
) -> list[StateResponse]:
    """List states sorted by name."""
    states = await service.list_states(search=search)
    return [StateResponse.model_validate(s, from_attributes=True) for s in states]


@router.get("/states/{state_id}", response_model=StateResponse)
async def get_state(
    state_id: str,
    service: LocationService = Depends(get_location_service),
) -> StateResponse:
    try:
        state = await service.get_state(state_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return StateResponse.model_validate(state, from_attributes=True)


@router.post("/states", response_model=StateResponse, status_code=status.HTTP_201_CREATED)
async def create_state(
    data: StateCreate,
    service: LocationService = Depends(get_location_service),
) -> StateResponse:
    try:
        state = await service.create_state(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return StateResponse.model_validate(state, from_attributes=True)


@router.put("/states/{state_id}", response_model=StateResponse)
async def update_state(
    state_id: str,
    data: StateUpdate,
    service: LocationService = Depends(get_location_service),
) -> StateResponse:
    try:
        state = await service.update_state(state_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return StateResponse.model_validate(state, from_attributes=True)


@router.delete("/states/{state_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_state(
    state_id: str,
    service: LocationService = Depends(get_location_service),
) -> None:
    """Delete a state with no cities linked to it."""
    try:
        await service.delete_state(state_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


# ── Cities ──────────────────────────────────────────────────────────


@router.get("/cities", response_model=list[CityResponse])
async def list_cities(
    state_id: str | None = Query(None),
    state: str | None = Query(None, max_length=2, description="UF code"),
    search: str | None = Query(None, description="Match on city or state name"),
    service: LocationService = Depends(get_location_service),
) -> list[CityResponse]:
    """List cities sorted by name, optionally restricted to one state."""
    cities = await service.list_cities(state_id=state_id, state_code=state, search=search)
    return [CityResponse.model_validate(c, from_attributes=True) for c in cities]


@router.get("/cities/{city_id}", response_model=CityResponse)
async def get_city(
    city_id: str,
    service: LocationService = Depends(get_location_service),
) -> CityResponse:
    try:
        city = await service.get_city(city_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return CityResponse.model_validate(city, from_attributes=True)


@router.post("/cities", response_model=CityResponse, status_code=status.HTTP_201_CREATED)
async def create_city(
    data: CityCreate,
    service: LocationService = Depends(get_location_service),
) -> CityResponse:
    try:
        city = await service.create_city(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return CityResponse.model_validate(city, from_attributes=True)


@router.put("/cities/{city_id}", response_model=CityResponse)
async def update_city(
    city_id: str,
    data: CityUpdate,
    service: LocationService = Depends(get_location_service),
) -> CityResponse:
    try:
        city = await service.update_city(city_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return CityResponse.model_validate(city, from_attributes=True)


@router.delete("/cities/{city_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_city(
    city_id: str,
    service: LocationService = Depends(get_location_service),
) -> None:
    try:
        await service.delete_city(city_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
