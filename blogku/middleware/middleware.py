"""
Middleware components for the blog API.

This module contains middleware for security headers, request logging and
CORS handling, plus the lifespan handler that wires the database, cache and
image storage into ``app.state``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from blogku.configs import ContentConfig, settings
from blogku.db import close_db, init_db
from blogku.managers.cache_manager import CacheManager
from blogku.monitoring import bind_request_id, clear_context, configure_logging, get_logger
from blogku.monitoring.side_effects import LoggingSideEffectSink
from blogku.services.storage import LocalImageStorage
from blogku.utils.helpers import host

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown."""
    configure_logging()
    logger.info("Starting application", app=app.title, environment=settings.ENVIRONMENT)

    try:
        await init_db()

        cache_manager = CacheManager()
        await cache_manager.initialize()
        app.state.cache_manager = cache_manager

        storage = LocalImageStorage(settings.UPLOADS_DIR, ContentConfig().allowed_image_extensions)
        settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
        app.state.image_storage = storage
        app.state.side_effect_sink = LoggingSideEffectSink()

        logger.info("Services initialized", cache_backend=cache_manager.backend)
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info("Shutting down application", app=app.title)
    try:
        await cache_manager.shutdown()
        await close_db()
        logger.info("Services cleaned up successfully")
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log method, path, status and duration, tagging logs with a request id."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_request_id(request_id)
        start_time = perf_counter()
        try:
            response = await call_next(request)
            duration_ms = (perf_counter() - start_time) * 1000
            logger.info(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
                client=host(request),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
