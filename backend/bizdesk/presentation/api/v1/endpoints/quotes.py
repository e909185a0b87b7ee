"""Quote endpoints — CRUD, status transitions and PDF export."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from bizdesk.application.schemas import OrderResponse, QuoteCreate, QuoteResponse, QuoteUpdate
from bizdesk.application.services import DocumentService, QuoteService
from bizdesk.domain.entities import QuoteStatus
from bizdesk.infrastructure.dependencies import get_document_service, get_quote_service
from bizdesk.presentation.api.v1.errors import DOMAIN_ERRORS, http_error, pdf_response

router = APIRouter(prefix="/quotes", tags=["Quotes"])


@router.get("", response_model=list[QuoteResponse])
async def list_quotes(
    status_filter: QuoteStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, description="Match on quote number or client name"),
    service: QuoteService = Depends(get_quote_service),
) -> list[QuoteResponse]:
    quotes = await service.list_quotes(status=status_filter, search=search)
    return [QuoteResponse.model_validate(q, from_attributes=True) for q in quotes]


@router.get("/{quote_id}", response_model=QuoteResponse)
async def get_quote(
    quote_id: str,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    try:
        quote = await service.get_quote(quote_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return QuoteResponse.model_validate(quote, from_attributes=True)


@router.post("", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
async def create_quote(
    data: QuoteCreate,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    """Create a draft quote. Number and totals are assigned here."""
    try:
        quote = await service.create_quote(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return QuoteResponse.model_validate(quote, from_attributes=True)


@router.put("/{quote_id}", response_model=QuoteResponse)
async def update_quote(
    quote_id: str,
    data: QuoteUpdate,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    try:
        quote = await service.update_quote(quote_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return QuoteResponse.model_validate(quote, from_attributes=True)


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quote(
    quote_id: str,
    service: QuoteService = Depends(get_quote_service),
) -> None:
    try:
        await service.delete_quote(quote_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.post("/{quote_id}/send", response_model=QuoteResponse)
async def send_quote(
    quote_id: str,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    try:
        quote = await service.send_quote(quote_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return QuoteResponse.model_validate(quote, from_attributes=True)


@router.post("/{quote_id}/approve", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def approve_quote(
    quote_id: str,
    service: QuoteService = Depends(get_quote_service),
) -> OrderResponse:
    """Approve the quote and return the pending order opened from it."""
    try:
        _, order = await service.approve_quote(quote_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return OrderResponse.model_validate(order, from_attributes=True)


@router.post("/{quote_id}/reject", response_model=QuoteResponse)
async def reject_quote(
    quote_id: str,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    try:
        quote = await service.reject_quote(quote_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return QuoteResponse.model_validate(quote, from_attributes=True)


@router.get("/{quote_id}/pdf")
async def quote_pdf(
    quote_id: str,
    documents: DocumentService = Depends(get_document_service),
) -> StreamingResponse:
    try:
        document = await documents.quote_pdf(quote_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return pdf_response(document)
