"""Pydantic DTOs for report data."""

from datetime import datetime

from pydantic import BaseModel

from bizdesk.application.schemas.client import ClientResponse
from bizdesk.application.schemas.order import OrderResponse


class OrdersReportSummary(BaseModel):
    order_count: int
    item_count: int
    total_value: float
    average_value: float


class OrdersReportResponse(BaseModel):
    generated_at: datetime
    filters: list[str]
    orders: list[OrderResponse]
    summary: OrdersReportSummary


class ClientsReportSummary(BaseModel):
    total: int
    individuals: int
    organizations: int


class ClientsReportResponse(BaseModel):
    generated_at: datetime
    filters: list[str]
    clients: list[ClientResponse]
    summary: ClientsReportSummary


class ClientOrdersGroupResponse(BaseModel):
    client: ClientResponse
    orders: list[OrderResponse]
    order_count: int
    subtotal: float


class ClientOrdersReportResponse(BaseModel):
    generated_at: datetime
    filters: list[str]
    groups: list[ClientOrdersGroupResponse]
    order_count: int
    grand_total: float


class RevenueSummaryResponse(BaseModel):
    completed_orders: int
    total_revenue: float

    model_config = {"from_attributes": True}
