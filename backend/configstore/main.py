"""Config Store API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ConfigStoreError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables created on startup only when database_create_tables is set;
      otherwise the schema comes from alembic migrations
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import configstore.models  # noqa: F401
from configstore.api.error_handlers import register_error_handlers
from configstore.api.routes import datasources, health
from configstore.config import get_settings
from configstore.db.base import Base
from configstore.infrastructure.database import init_db
from configstore.infrastructure.observability import setup_logging

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
        async with manager.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("Config store API started")
    yield
    await manager.dispose()
    logger.info("Config store API shutting down")


app = FastAPI(
    title="Config Store API", version="0.1.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(datasources.router)

register_error_handlers(app)
