"""Helpers shared by the services that read through and write around the DataManager."""

import logging
from typing import Any

from bizdesk.application.services.data_manager import Collection, DataManager

logger = logging.getLogger(__name__)


async def ensure_loaded(data_manager: DataManager, collection: Collection) -> Any:
    """Return the cached snapshot, fetching it first if it was never loaded.

    A fetch already running for the collection is awaited instead of
    answering from the snapshot it is about to replace.
    """
    if data_manager.is_loading(collection):
        await data_manager.wait_for_load(collection)
    if not data_manager.is_loaded(collection):
        return await data_manager.load_data(collection)
    return data_manager.get_data(collection)


async def reconcile(data_manager: DataManager, *collections: Collection) -> None:
    """Force-reload collections after a confirmed write.

    The write already succeeded, so a failed reload is only logged: the
    optimistic snapshot stays in place until the next successful load.
    """
    try:
        await data_manager.invalidate_multiple(collections)
    except Exception as exc:
        logger.warning(
            "Could not refresh %s after write: %s",
            ", ".join(c.value for c in collections),
            exc,
        )
