"""GoREST Proxy API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the normalized error envelope
    - CORS configured from settings (not hardcoded)
    - Database and GoREST client initialized on startup, released on shutdown

Run with: uvicorn gorest_proxy.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gorest_proxy.api.error_handlers import register_error_handlers
from gorest_proxy.api.routes import health, users
from gorest_proxy.config import get_settings
from gorest_proxy.infrastructure.database import init_db
from gorest_proxy.infrastructure.gorest_client import GoRestClient
from gorest_proxy.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_tables()
    app.state.gorest_client = GoRestClient.from_settings(
        settings.gorest_base_url, settings.gorest_timeout_seconds,
    )
    logger.info("GoREST proxy started")
    yield
    logger.info("GoREST proxy shutting down")
    await app.state.gorest_client.aclose()
    await manager.dispose()


app = FastAPI(
    title="GoREST Proxy API", version=health.SERVICE_VERSION, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)
