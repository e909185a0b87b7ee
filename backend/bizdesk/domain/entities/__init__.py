from .client import Client, ClientType
from .line_item import ProductItem, ServiceItem, items_total
from .quote import Quote, QuoteStatus
from .order import Order, OrderStatus
from .company_settings import CompanySettings, Counters
from .location import City, State
from .report import (
    ORDER_STATUS_LABELS,
    ClientOrdersGroup,
    ClientOrdersReport,
    ClientsReport,
    OrdersReport,
    ReportFilters,
    RevenueSummary,
)

__all__ = [
    "Client",
    "ClientType",
    "ProductItem",
    "ServiceItem",
    "items_total",
    "Quote",
    "QuoteStatus",
    "Order",
    "OrderStatus",
    "CompanySettings",
    "Counters",
    "City",
    "State",
    "ORDER_STATUS_LABELS",
    "ClientOrdersGroup",
    "ClientOrdersReport",
    "ClientsReport",
    "OrdersReport",
    "ReportFilters",
    "RevenueSummary",
]
