"""Order endpoints — manual creation, status tracking and receipts."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from bizdesk.application.schemas import OrderCreate, OrderResponse, OrderStatusUpdate
from bizdesk.application.services import DocumentService, OrderService
from bizdesk.domain.entities import OrderStatus
from bizdesk.infrastructure.dependencies import get_document_service, get_order_service
from bizdesk.presentation.api.v1.errors import DOMAIN_ERRORS, http_error, pdf_response

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    status_filter: OrderStatus | None = Query(None, alias="status"),
    service: OrderService = Depends(get_order_service),
) -> list[OrderResponse]:
    orders = await service.list_orders(status=status_filter)
    return [OrderResponse.model_validate(o, from_attributes=True) for o in orders]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    try:
        order = await service.get_order(order_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return OrderResponse.model_validate(order, from_attributes=True)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    data: OrderCreate,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """Register an order that did not come from a quote."""
    try:
        order = await service.create_order(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return OrderResponse.model_validate(order, from_attributes=True)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    try:
        order = await service.update_order_status(order_id, data.status)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return OrderResponse.model_validate(order, from_attributes=True)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
) -> None:
    try:
        await service.delete_order(order_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.get("/{order_id}/receipt")
async def order_receipt(
    order_id: str,
    documents: DocumentService = Depends(get_document_service),
) -> StreamingResponse:
    try:
        document = await documents.receipt_pdf(order_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return pdf_response(document)
