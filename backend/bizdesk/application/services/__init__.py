from .data_manager import CacheOperation, Collection, DataManager
from .client_service import ClientService
from .quote_service import QuoteService
from .order_service import OrderService
from .company_settings_service import CompanySettingsService
from .location_service import LocationService
from .report_service import ReportService
from .document_service import DocumentService, RenderedDocument
from .sse_manager import SSEManager

__all__ = [
    "CacheOperation",
    "Collection",
    "DataManager",
    "ClientService",
    "QuoteService",
    "OrderService",
    "CompanySettingsService",
    "LocationService",
    "ReportService",
    "DocumentService",
    "RenderedDocument",
    "SSEManager",
]
