"""Authentication errors."""

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from blogku.errors.base import BaseAppError, create_exception_handler
from blogku.monitoring import get_logger

logger = get_logger(__name__)


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication required",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when credentials are invalid."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials", HTTP_401_UNAUTHORIZED)


class InvalidTokenError(UserAuthenticationError):
    """Raised when a token is missing, malformed or expired."""

    def __init__(self) -> None:
        super().__init__("Invalid or expired token", HTTP_401_UNAUTHORIZED)


class ForbiddenError(UserAuthenticationError):
    """Raised when the caller is identified but not allowed."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class PasswordHashingError(BaseAppError):
    """Raised when hashing a password fails."""

    def __init__(self, detail: str = "Failed to hash password") -> None:
        super().__init__(detail)


auth_exception_handler = create_exception_handler(logger)
