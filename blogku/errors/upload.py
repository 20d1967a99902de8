"""
Upload-related error classes.

This module defines custom exceptions for image upload operations,
including extension validation and storage errors.
"""

from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from blogku.errors.base import BaseAppError, create_exception_handler
from blogku.errors.validation import InvalidInputError
from blogku.monitoring import get_logger

logger = get_logger(__name__)


class UnsupportedImageTypeError(InvalidInputError):
    """Exception raised when the uploaded image extension is not allowed."""

    def __init__(
        self,
        extension: str,
        allowed_extensions: list[str] | None = None,
    ) -> None:
        allowed = allowed_extensions or [".jpeg", ".jpg", ".png", ".webp"]
        detail = "File extension not allowed. Please use JPG, JPEG, PNG, or WebP images."
        super().__init__(detail=detail)
        self.extension = extension
        self.allowed_extensions = allowed


class StorageError(BaseAppError):
    """Exception raised when storage operation fails."""

    def __init__(self, detail: str = "We couldn't save your file. Please try again later.") -> None:
        super().__init__(detail=detail, status_code=HTTP_500_INTERNAL_SERVER_ERROR)


upload_exception_handler = create_exception_handler(logger)
