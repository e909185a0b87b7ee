"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bizdesk.config import get_settings
from bizdesk.application.services import SSEManager
from bizdesk.infrastructure.database import Base, CounterModel, engine
from bizdesk.infrastructure.database.session import async_session_factory
from bizdesk.infrastructure.database.repositories import SQLAlchemyBusinessStore
from bizdesk.infrastructure.dependencies import build_data_manager
from bizdesk.infrastructure.logging.log_config import setup_logging
from bizdesk.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
    if not settings.database_url.startswith("postgresql://"):
        return
    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    # Build a connection URL pointing at the default 'postgres' database
    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _seed_counters() -> None:
    """Ensure the single counters row exists, starting both sequences at 1.

    Idempotent — safe to call on every startup.
    """
    async with async_session_factory() as session:
        existing = await session.get(CounterModel, 1)
        if existing is None:
            session.add(CounterModel(id=1, quote_counter=1, order_counter=1))
            await session.commit()
            logger.info("Seeded document counters")
        else:
            logger.debug(
                "Counters at quote=%d order=%d",
                existing.quote_counter,
                existing.order_counter,
            )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, wire the cache, relay its changes over SSE."""
    setup_logging()

    # 0. Ensure the PostgreSQL database exists (auto-create if missing)
    await _ensure_database_exists()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Seed the document counters
    await _seed_counters()

    # 3. Store, cache and change feed
    store = SQLAlchemyBusinessStore(async_session_factory)
    data_manager = build_data_manager(store)
    sse_manager = SSEManager()
    unsubscribers = sse_manager.follow(data_manager)

    app.state.store = store
    app.state.data_manager = data_manager
    app.state.sse_manager = sse_manager
    logger.info("BizDesk ready — collections load on first request")

    yield

    # Shutdown
    for unsubscribe in unsubscribers:
        unsubscribe()
    data_manager.reset()
    await sse_manager.shutdown()
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bizdesk.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
