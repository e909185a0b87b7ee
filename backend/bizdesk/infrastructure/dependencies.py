"""FastAPI dependency injection — wires infrastructure to application layer.

The store, the DataManager and the SSEManager are built once in the
application lifespan and kept on ``app.state``; services are cheap
per-request wrappers around them.
"""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request

from bizdesk.config import get_settings
from bizdesk.application.interfaces import BusinessStore, DocumentRenderer
from bizdesk.application.services import (
    ClientService,
    Collection,
    CompanySettingsService,
    DataManager,
    DocumentService,
    LocationService,
    OrderService,
    QuoteService,
    ReportService,
    SSEManager,
)
from bizdesk.domain.numbering import DocumentNumbering
from bizdesk.infrastructure.documents import ReportLabDocumentRenderer


def build_data_manager(store: BusinessStore) -> DataManager:
    """Create the cache with one fetcher per collection, all backed by ``store``."""
    return DataManager(
        {
            Collection.CLIENTS: store.get_clients,
            Collection.QUOTES: store.get_quotes,
            Collection.ORDERS: store.get_orders,
            Collection.COMPANY_SETTINGS: store.get_company_settings,
        }
    )


def _numbering() -> DocumentNumbering:
    settings = get_settings()
    return DocumentNumbering(
        quote_prefix=settings.quote_number_prefix,
        order_prefix=settings.order_number_prefix,
        width=settings.document_number_width,
    )


def get_business_store(request: Request) -> BusinessStore:
    return request.app.state.store


def get_data_manager(request: Request) -> DataManager:
    return request.app.state.data_manager


def get_sse_manager(request: Request) -> SSEManager:
    return request.app.state.sse_manager


def get_document_renderer() -> DocumentRenderer:
    return ReportLabDocumentRenderer()


async def get_client_service(
    store: BusinessStore = Depends(get_business_store),
    data_manager: DataManager = Depends(get_data_manager),
) -> AsyncGenerator[ClientService, None]:
    """Provides a ClientService bound to the shared store and cache."""
    yield ClientService(store, data_manager)


async def get_quote_service(
    store: BusinessStore = Depends(get_business_store),
    data_manager: DataManager = Depends(get_data_manager),
) -> AsyncGenerator[QuoteService, None]:
    """Provides a QuoteService using the configured numbering and validity period."""
    yield QuoteService(
        store,
        data_manager,
        numbering=_numbering(),
        validity_days=get_settings().quote_validity_days,
    )


async def get_order_service(
    store: BusinessStore = Depends(get_business_store),
    data_manager: DataManager = Depends(get_data_manager),
) -> AsyncGenerator[OrderService, None]:
    yield OrderService(store, data_manager, numbering=_numbering())


async def get_company_settings_service(
    store: BusinessStore = Depends(get_business_store),
    data_manager: DataManager = Depends(get_data_manager),
) -> AsyncGenerator[CompanySettingsService, None]:
    yield CompanySettingsService(store, data_manager)


async def get_location_service(
    store: BusinessStore = Depends(get_business_store),
) -> AsyncGenerator[LocationService, None]:
    yield LocationService(store)


async def get_report_service(
    data_manager: DataManager = Depends(get_data_manager),
) -> AsyncGenerator[ReportService, None]:
    yield ReportService(data_manager)


async def get_document_service(
    renderer: DocumentRenderer = Depends(get_document_renderer),
    quotes: QuoteService = Depends(get_quote_service),
    orders: OrderService = Depends(get_order_service),
    reports: ReportService = Depends(get_report_service),
    company: CompanySettingsService = Depends(get_company_settings_service),
) -> AsyncGenerator[DocumentService, None]:
    """Provides a DocumentService rendering PDFs with reportlab."""
    yield DocumentService(renderer, quotes, orders, reports, company)
