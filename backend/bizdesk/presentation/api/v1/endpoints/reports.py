"""Report endpoints — JSON data and PDF exports."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from bizdesk.application.schemas import (
    ClientOrdersGroupResponse,
    ClientOrdersReportResponse,
    ClientResponse,
    ClientsReportResponse,
    ClientsReportSummary,
    OrderResponse,
    OrdersReportResponse,
    OrdersReportSummary,
    RevenueSummaryResponse,
)
from bizdesk.application.services import DocumentService, ReportService
from bizdesk.domain.entities import OrderStatus, ReportFilters
from bizdesk.infrastructure.dependencies import get_document_service, get_report_service
from bizdesk.presentation.api.v1.errors import DOMAIN_ERRORS, http_error, pdf_response

router = APIRouter(prefix="/reports", tags=["Reports"])


def report_filters(
    client_id: str | None = Query(None),
    city: str | None = Query(None),
    state: str | None = Query(None, max_length=2),
    status: OrderStatus | None = Query(None),
    start_date: date | None = Query(None, description="Inclusive, YYYY-MM-DD"),
    end_date: date | None = Query(None, description="Inclusive, YYYY-MM-DD"),
) -> ReportFilters:
    return ReportFilters(
        client_id=client_id or None,
        city=city or None,
        state=state or None,
        status=status,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/summary", response_model=RevenueSummaryResponse)
async def revenue_summary(
    service: ReportService = Depends(get_report_service),
) -> RevenueSummaryResponse:
    """Completed-order count and revenue, ignoring every filter."""
    return RevenueSummaryResponse.model_validate(await service.summary())


@router.get("/orders", response_model=OrdersReportResponse)
async def orders_report(
    filters: ReportFilters = Depends(report_filters),
    service: ReportService = Depends(get_report_service),
) -> OrdersReportResponse:
    """Orders matching the filters, dated by completion when completed."""
    report = await service.orders_report(filters)
    return OrdersReportResponse(
        generated_at=report.generated_at,
        filters=filters.describe(await service.clients()),
        orders=[OrderResponse.model_validate(o, from_attributes=True) for o in report.orders],
        summary=OrdersReportSummary(
            order_count=len(report.orders),
            item_count=report.item_count,
            total_value=report.total_value,
            average_value=report.average_value,
        ),
    )


@router.get("/clients", response_model=ClientsReportResponse)
async def clients_report(
    filters: ReportFilters = Depends(report_filters),
    service: ReportService = Depends(get_report_service),
) -> ClientsReportResponse:
    """Clients in the given city/state, sorted by name."""
    report = await service.clients_report(filters)
    return ClientsReportResponse(
        generated_at=report.generated_at,
        filters=filters.describe(),
        clients=[ClientResponse.model_validate(c, from_attributes=True) for c in report.clients],
        summary=ClientsReportSummary(
            total=len(report.clients),
            individuals=report.individuals,
            organizations=report.organizations,
        ),
    )


@router.get("/client-orders", response_model=ClientOrdersReportResponse)
async def client_orders_report(
    filters: ReportFilters = Depends(report_filters),
    service: ReportService = Depends(get_report_service),
) -> ClientOrdersReportResponse:
    """Completed orders grouped per client, with subtotals."""
    report = await service.client_orders_report(filters)
    return ClientOrdersReportResponse(
        generated_at=report.generated_at,
        filters=filters.describe(await service.clients()),
        groups=[
            ClientOrdersGroupResponse(
                client=ClientResponse.model_validate(g.client, from_attributes=True),
                orders=[OrderResponse.model_validate(o, from_attributes=True) for o in g.orders],
                order_count=len(g.orders),
                subtotal=g.subtotal,
            )
            for g in report.groups
        ],
        order_count=report.order_count,
        grand_total=report.grand_total,
    )


@router.get("/orders/pdf")
async def orders_report_pdf(
    filters: ReportFilters = Depends(report_filters),
    documents: DocumentService = Depends(get_document_service),
) -> StreamingResponse:
    try:
        document = await documents.orders_report_pdf(filters)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return pdf_response(document)


@router.get("/clients/pdf")
async def clients_report_pdf(
    filters: ReportFilters = Depends(report_filters),
    documents: DocumentService = Depends(get_document_service),
) -> StreamingResponse:
    try:
        document = await documents.clients_report_pdf(filters)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return pdf_response(document)


@router.get("/client-orders/pdf")
async def client_orders_report_pdf(
    filters: ReportFilters = Depends(report_filters),
    documents: DocumentService = Depends(get_document_service),
) -> StreamingResponse:
    try:
        document = await documents.client_orders_report_pdf(filters)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return pdf_response(document)
