from .client import ClientCreate, ClientUpdate, ClientResponse
from .quote import (
    ProductItemResponse,
    ProductItemSchema,
    QuoteCreate,
    QuoteResponse,
    QuoteUpdate,
    ServiceItemResponse,
    ServiceItemSchema,
)
from .order import OrderCreate, OrderResponse, OrderStatusUpdate
from .company_settings import CompanySettingsResponse, CompanySettingsUpdate
from .report import (
    ClientOrdersGroupResponse,
    ClientOrdersReportResponse,
    ClientsReportResponse,
    ClientsReportSummary,
    OrdersReportResponse,
    OrdersReportSummary,
    RevenueSummaryResponse,
)
from .location import (
    CityCreate,
    CityResponse,
    CityUpdate,
    StateCreate,
    StateResponse,
    StateUpdate,
)
from .cache import CacheReloadResponse, CacheStatusResponse, CollectionStatus

__all__ = [
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ProductItemResponse",
    "ProductItemSchema",
    "QuoteCreate",
    "QuoteResponse",
    "QuoteUpdate",
    "ServiceItemResponse",
    "ServiceItemSchema",
    "OrderCreate",
    "OrderResponse",
    "OrderStatusUpdate",
    "CompanySettingsResponse",
    "CompanySettingsUpdate",
    "ClientOrdersGroupResponse",
    "ClientOrdersReportResponse",
    "ClientsReportResponse",
    "ClientsReportSummary",
    "OrdersReportResponse",
    "OrdersReportSummary",
    "RevenueSummaryResponse",
    "CacheReloadResponse",
    "CacheStatusResponse",
    "CollectionStatus",
    "CityCreate",
    "CityResponse",
    "CityUpdate",
    "StateCreate",
    "StateResponse",
    "StateUpdate",
]
