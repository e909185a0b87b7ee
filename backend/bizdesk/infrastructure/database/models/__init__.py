from .client import ClientModel
from .quote import QuoteModel
from .order import OrderModel
from .company_settings import CompanySettingsModel, CounterModel
from .location import CityModel, StateModel

__all__ = [
    "ClientModel",
    "QuoteModel",
    "OrderModel",
    "CompanySettingsModel",
    "CounterModel",
    "StateModel",
    "CityModel",
]
