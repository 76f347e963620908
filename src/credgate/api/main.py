"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routers, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from psycopg_pool import ConnectionPool

from credgate.adapters.repository import (
    InMemoryAccountRepository,
    PostgresAccountRepository,
    run_migrations,
)
from credgate.api.dashboard import router as dashboard_router
from credgate.api.errors import register_exception_handlers
from credgate.api.v1 import router as v1_router
from credgate.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Account registration and sign-in",
    },
    {
        "name": "dashboard",
        "description": "Views that require a signed-in session",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Selects the account store (PostgreSQL or in-memory)
    - For PostgreSQL: creates the connection pool and runs migrations
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    pool: ConnectionPool | None = None

    logger.info("Starting application...")

    if settings.storage_backend == "memory":
        logger.warning("Using in-memory account store; accounts are lost on restart")
        app.state.repository = InMemoryAccountRepository()
    else:
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            open=True,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

        app.state.repository = PostgresAccountRepository(
            pool, timeout_seconds=settings.storage_timeout_seconds
        )

    # Store pool in app state for the health check
    app.state.pool = pool

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="credgate",
    description="Account registration and session-gated access API",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")
app.include_router(dashboard_router)


@app.get("/health")
def health_check(request: Request, settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    pool = getattr(request.app.state, "pool", None)
    if pool is not None:
        with pool.connection(timeout=settings.storage_timeout_seconds) as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy"}
