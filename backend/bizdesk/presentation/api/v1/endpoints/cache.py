"""Cache endpoints — inspect and reload the DataManager, stream its change events."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from bizdesk.application.schemas import CacheReloadResponse, CacheStatusResponse
from bizdesk.application.services import Collection, DataManager, SSEManager
from bizdesk.infrastructure.dependencies import get_data_manager, get_sse_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cache", tags=["Cache"])


def _status(data_manager: DataManager) -> CacheStatusResponse:
    return CacheStatusResponse.model_validate({"collections": data_manager.snapshot_status()})


@router.get("", response_model=CacheStatusResponse)
async def cache_status(
    data_manager: DataManager = Depends(get_data_manager),
) -> CacheStatusResponse:
    """Loading/loaded flags, size and subscriber count per collection."""
    return _status(data_manager)


@router.post("/reload", response_model=CacheReloadResponse)
async def reload_all(
    data_manager: DataManager = Depends(get_data_manager),
) -> CacheReloadResponse:
    """Force-refetch every collection from the store."""
    try:
        await data_manager.invalidate_all()
    except Exception as e:
        logger.exception("Cache reload failed")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return CacheReloadResponse(
        reloaded=[c.value for c in Collection],
        status=_status(data_manager),
    )


@router.post("/{collection}/reload", response_model=CacheReloadResponse)
async def reload_collection(
    collection: Collection,
    data_manager: DataManager = Depends(get_data_manager),
) -> CacheReloadResponse:
    """Force-refetch one collection from the store."""
    try:
        await data_manager.invalidate_and_reload(collection)
    except Exception as e:
        logger.exception("Reload of %s failed", collection.value)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return CacheReloadResponse(reloaded=[collection.value], status=_status(data_manager))


@router.get("/stream")
async def stream_changes(
    sse: SSEManager = Depends(get_sse_manager),
) -> StreamingResponse:
    """SSE endpoint — one ``collection_changed`` event per cache notification."""
    return StreamingResponse(
        sse.subscribe(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
