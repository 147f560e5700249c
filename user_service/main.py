"""User Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ServiceError -> {code, message} JSON responses
    - Database initialized on startup via lifespan context manager, disposed on shutdown
    - Title/version are set once at construction and never mutated per request
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_service.api.error_handlers import register_error_handlers
from user_service.api.routes import health, users
from user_service.config import Settings, get_settings
from user_service.infrastructure import database
from user_service.infrastructure.database import init_db, pool_limits
from user_service.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the ASGI application for the given settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(
            settings.log_level,
            settings.log_format,
            caller=settings.log_caller,
            stack_trace=settings.log_stack_trace,
            version=settings.version,
        )
        manager = init_db(
            settings.db_conn,
            **pool_limits(settings.db_max_open_conns, settings.db_max_idle_conns),
        )
        logger.info("server was started", extra={"addr": settings.server_addr})
        yield
        await manager.dispose()
        database.db_manager = None
        logger.info("server was stopped")

    app = FastAPI(
        title="User Service API",
        description="CRUD over the user resource",
        version=settings.version,
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app


app = create_app()
