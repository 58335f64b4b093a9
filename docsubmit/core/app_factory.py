"""Application factory for the FastAPI app.

Centralizes app construction (middleware, handlers, routers, service
lifecycle) so tests can build an app around their own service.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import anyio
from fastapi import FastAPI

from docsubmit.adapters.rate_limit.factory import build_rate_limiter
from docsubmit.adapters.submitter.factory import create_document_submitter
from docsubmit.api.routes import documents_router, health_router
from docsubmit.core.config import settings
from docsubmit.core.exception_handlers import setup_exception_handlers
from docsubmit.core.logging import configure_logging
from docsubmit.core.middleware import request_id_middleware
from docsubmit.services.document_service import DocumentService

logger = logging.getLogger(__name__)


def build_document_service() -> DocumentService:
    """Build the service from settings.

    Raises:
        InvalidConfigurationError: If the rate limit settings are invalid.
    """
    limiter = build_rate_limiter(settings.rate_limit)
    return DocumentService(limiter=limiter, submitter=create_document_submitter(settings.submitter))


def create_app(document_service: DocumentService | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        document_service: Optional pre-built service. When omitted, one is
            built from settings on startup and shut down on exit. An injected
            service is left for its owner to shut down.

    Returns:
        Configured FastAPI app.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = document_service is None
        service = build_document_service() if owned else document_service
        app.state.document_service = service
        # Blocked submissions get their own thread budget so they never
        # starve the shared threadpool.
        app.state.submission_capacity = anyio.CapacityLimiter(
            settings.app.max_concurrent_submissions
        )
        snapshot = service.rate_limit_status()
        logger.info(
            "app.started",
            extra={"limit": snapshot.limit, "window_s": snapshot.window_seconds},
        )
        try:
            yield
        finally:
            if owned:
                service.shutdown()
            logger.info("app.stopped")

    app = FastAPI(
        title="Document Submission API",
        description=(
            "Submits documents to the registration endpoint while capping the "
            "number of submissions per fixed time window. Requests beyond the "
            "limit wait for the next window instead of being rejected."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        lifespan=lifespan,
    )

    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(documents_router, prefix="/v1")
    app.include_router(health_router)

    return app
