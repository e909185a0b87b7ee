from .client_repository import SQLAlchemyClientRepository
from .quote_repository import SQLAlchemyQuoteRepository
from .order_repository import SQLAlchemyOrderRepository
from .company_settings_repository import SQLAlchemyCompanySettingsRepository
from .location_repository import SQLAlchemyCityRepository, SQLAlchemyStateRepository
from .business_store import SQLAlchemyBusinessStore

__all__ = [
    "SQLAlchemyClientRepository",
    "SQLAlchemyQuoteRepository",
    "SQLAlchemyOrderRepository",
    "SQLAlchemyCompanySettingsRepository",
    "SQLAlchemyStateRepository",
    "SQLAlchemyCityRepository",
    "SQLAlchemyBusinessStore",
]
