"""Custom validation error handling for FastAPI."""

from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_422_UNPROCESSABLE_CONTENT

from blogku.errors.base import BaseAppError, create_exception_handler
from blogku.monitoring import get_logger
from blogku.utils.helpers import host

logger = get_logger(__name__)


class InvalidInputError(BaseAppError):
    """Raised when a request is well-formed but its content is not acceptable."""

    def __init__(self, detail: str = "Invalid input") -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)


invalid_input_exception_handler = create_exception_handler(logger)


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic validation errors with cleaner response format.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)

    formatted_errors = []
    for error in exec_error.errors():
        formatted_error = {
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),  # Skip 'body'
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        # Context values such as ValueError instances are not JSON serializable
        if "ctx" in error:
            formatted_error["context"] = {
                key: str(value) if isinstance(value, Exception) else value
                for key, value in error["ctx"].items()
            }
        formatted_errors.append(formatted_error)

    logger.warning(
        "Validation error",
        client=host(request),
        path=request.url.path,
        errors=formatted_errors,
    )

    return ORJSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "detail": "Validation failed",
            "errors": formatted_errors,
        },
    )
