"""Application service for the company settings singleton."""

import logging

from bizdesk.application.interfaces import BusinessStore
from bizdesk.application.schemas.company_settings import CompanySettingsUpdate
from bizdesk.application.services.cache_sync import ensure_loaded, reconcile
from bizdesk.application.services.data_manager import CacheOperation, Collection, DataManager
from bizdesk.domain.entities import CompanySettings

logger = logging.getLogger(__name__)


class CompanySettingsService:
    def __init__(self, store: BusinessStore, data_manager: DataManager):
        self._store = store
        self._data = data_manager

    async def get_settings(self) -> CompanySettings | None:
        """Return the configured settings, or None when the company was never set up."""
        return await ensure_loaded(self._data, Collection.COMPANY_SETTINGS)

    async def save_settings(self, data: CompanySettingsUpdate) -> CompanySettings:
        """Replace the whole settings record, keeping its id if one exists."""
        current = await self.get_settings()
        settings = CompanySettings(**data.model_dump())
        if current is not None:
            settings.id = current.id

        saved = await self._store.save_company_settings(settings)
        logger.info("Saved company settings for %s", saved.company_name)

        self._data.update_local_data(Collection.COMPANY_SETTINGS, CacheOperation.UPDATE, saved)
        await reconcile(self._data, Collection.COMPANY_SETTINGS)
        return saved
