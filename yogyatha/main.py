"""FastAPI application entry point — wires storage, event bus and routers.

Usage:
    python -m yogyatha.main
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from yogyatha.analytics.audit import AuditLogger
from yogyatha.analytics.events import EventBus, event_bus
from yogyatha.analytics.service import AnalyticsService
from yogyatha.api import admin, routes
from yogyatha.config import settings
from yogyatha.schemas.events import EventType, SystemEvent
from yogyatha.storage.base import KeyValueStore, create_store
from yogyatha.storage.repositories import AnalyticsRepository

# ── Logging setup ────────────────────────────────────────────────────


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


configure_logging()

logger = logging.getLogger(__name__)


# ── App factory ──────────────────────────────────────────────────────


def create_app(store: KeyValueStore | None = None, bus: EventBus = event_bus) -> FastAPI:
    """Build the FastAPI app. Tests pass their own store and bus."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup and shutdown lifecycle."""
        logger.info("Starting %s (env=%s)", settings.app_name, settings.environment)

        # 1. Storage
        kv = store if store is not None else create_store(settings.storage)
        app.state.store = kv
        app.state.event_bus = bus

        # 2. Subscribers: audit sees everything, analytics only its types
        audit = AuditLogger(kv)
        analytics = AnalyticsService(AnalyticsRepository(kv))
        bus.subscribe(audit.on_event)
        bus.subscribe(analytics.on_event, event_types=AnalyticsService.watched_types)

        # 3. Event bus
        await bus.start()
        await bus.emit(SystemEvent(event_type=EventType.SYSTEM_STARTUP, source_module="main"))

        try:
            yield
        finally:
            logger.info("Shutting down %s...", settings.app_name)
            await bus.emit(SystemEvent(event_type=EventType.SYSTEM_SHUTDOWN, source_module="main"))
            await bus.stop()
            bus.unsubscribe(audit.on_event)
            bus.unsubscribe(analytics.on_event)

            await kv.close()
            logger.info("Store closed")

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Welfare scheme eligibility search and application tracking",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(routes.router)
    app.include_router(admin.router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "ok",
            "environment": settings.environment,
            "app_name": settings.app_name,
        }

    return app


app = create_app()


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "yogyatha.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
