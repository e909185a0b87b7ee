"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from bizdesk.presentation.api.v1.endpoints.health import router as health_router
from bizdesk.presentation.api.v1.endpoints.clients import router as clients_router
from bizdesk.presentation.api.v1.endpoints.quotes import router as quotes_router
from bizdesk.presentation.api.v1.endpoints.orders import router as orders_router
from bizdesk.presentation.api.v1.endpoints.company_settings import router as company_settings_router
from bizdesk.presentation.api.v1.endpoints.locations import router as locations_router
from bizdesk.presentation.api.v1.endpoints.reports import router as reports_router
from bizdesk.presentation.api.v1.endpoints.cache import router as cache_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(clients_router)
router.include_router(quotes_router)
router.include_router(orders_router)
router.include_router(company_settings_router)
router.include_router(locations_router)
router.include_router(reports_router)
router.include_router(cache_router)
