"""Blogku backend application."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles

from blogku import __version__
from blogku.configs import settings
from blogku.db import ping_db
from blogku.errors import (
    CacheExceptionError,
    DatabaseError,
    InvalidInputError,
    PasswordHashingError,
    StorageError,
    UserAuthenticationError,
    auth_exception_handler,
    cache_exception_handler,
    database_exception_handler,
    invalid_input_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from blogku.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from blogku.routes import api_router
from blogku.schemas import CacheHealthResponse, HealthCheckResponse
from blogku.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog content API with a cache-aside post repository",
    version=__version__,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={"docExpansion": "none", "operationsSorter": "method"},
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(api_router)

settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOADS_DIR), name="uploads")

errors = [
    (InvalidInputError, invalid_input_exception_handler),
    (DatabaseError, database_exception_handler),
    (UserAuthenticationError, auth_exception_handler),
    (PasswordHashingError, auth_exception_handler),
    (StorageError, upload_exception_handler),
    (CacheExceptionError, cache_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    operation_id="health_check",
)
async def health_check(request: Request) -> ORJSONResponse:
    """
    Report database and cache health.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Overall status plus database and cache details.
    """
    database_ok = await ping_db()
    cache_manager = getattr(request.app.state, "cache_manager", None)
    cache = CacheHealthResponse(**await cache_manager.health_check()) if cache_manager else None

    healthy = database_ok and (cache is None or cache.status == "healthy")
    response = HealthCheckResponse(
        version=app.version,
        status="ok" if healthy else "degraded",
        timestamp=today_str(),
        database="ok" if database_ok else "unavailable",
        cache=cache,
    )
    return ORJSONResponse(response.model_dump())
