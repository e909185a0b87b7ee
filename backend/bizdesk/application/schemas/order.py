"""Pydantic DTOs for orders."""

from datetime import datetime

from pydantic import BaseModel, Field

from bizdesk.application.schemas.client import ClientResponse
from bizdesk.application.schemas.quote import (
    ProductItemResponse,
    ProductItemSchema,
    ServiceItemResponse,
    ServiceItemSchema,
)
from bizdesk.domain.entities import OrderStatus


class OrderCreate(BaseModel):
    """Schema for entering an order directly, without a quote."""

    client_id: str = Field(..., min_length=1, max_length=36)
    services: list[ServiceItemSchema] = Field(default_factory=list)
    products: list[ProductItemSchema] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    id: str
    number: str
    client_id: str
    client: ClientResponse | None
    quote_id: str | None
    is_from_quote: bool
    services: list[ServiceItemResponse]
    products: list[ProductItemResponse]
    total: float
    status: OrderStatus
    created_at: datetime
    completed_at: datetime | None

    model_config = {"from_attributes": True}
