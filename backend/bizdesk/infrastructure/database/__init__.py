from .base import Base
from .session import (
    async_session_factory,
    build_session_factory,
    engine,
    get_async_url,
    unit_of_work,
)
from .models import (
    CityModel,
    ClientModel,
    CompanySettingsModel,
    CounterModel,
    StateModel,
    OrderModel,
    QuoteModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "build_session_factory",
    "get_async_url",
    "unit_of_work",
    "ClientModel",
    "CompanySettingsModel",
    "CounterModel",
    "OrderModel",
    "QuoteModel",
    "StateModel",
    "CityModel",
]
