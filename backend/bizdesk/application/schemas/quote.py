"""Pydantic DTOs for quotes and the line items shared with orders."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from bizdesk.application.schemas.client import ClientResponse
from bizdesk.domain.entities import QuoteStatus


class ServiceItemSchema(BaseModel):
    """A service line — total is always derived as hours × hourly_rate."""

    id: str | None = Field(None, max_length=36)
    description: str = Field(..., min_length=1, max_length=500)
    hours: float = Field(..., ge=0)
    hourly_rate: float = Field(..., ge=0)


class ProductItemSchema(BaseModel):
    """A product line — total is always derived as quantity × unit_price."""

    id: str | None = Field(None, max_length=36)
    description: str = Field(..., min_length=1, max_length=500)
    quantity: float = Field(..., gt=0)
    unit_price: float = Field(..., ge=0)


class ServiceItemResponse(BaseModel):
    id: str
    description: str
    hours: float
    hourly_rate: float
    total: float

    model_config = {"from_attributes": True}


class ProductItemResponse(BaseModel):
    id: str
    description: str
    quantity: float
    unit_price: float
    total: float

    model_config = {"from_attributes": True}


class QuoteCreate(BaseModel):
    """Schema for authoring a new quote. Number and totals are assigned by the server."""

    client_id: str = Field(..., min_length=1, max_length=36)
    services: list[ServiceItemSchema] = Field(default_factory=list)
    products: list[ProductItemSchema] = Field(default_factory=list)
    discount: float = Field(0.0, ge=0)
    valid_until: date | None = None
    notes: str = Field("", max_length=2000)


class QuoteUpdate(BaseModel):
    """Schema for editing a quote — all fields optional. Status changes use the transition endpoints."""

    client_id: str | None = Field(None, min_length=1, max_length=36)
    services: list[ServiceItemSchema] | None = None
    products: list[ProductItemSchema] | None = None
    discount: float | None = Field(None, ge=0)
    valid_until: date | None = None
    notes: str | None = Field(None, max_length=2000)


class QuoteResponse(BaseModel):
    id: str
    number: str
    client_id: str
    client: ClientResponse | None
    services: list[ServiceItemResponse]
    products: list[ProductItemResponse]
    subtotal: float
    discount: float
    total: float
    status: QuoteStatus
    valid_until: date
    notes: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
