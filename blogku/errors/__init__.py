from blogku.errors.auth import (
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordHashingError,
    UserAuthenticationError,
    auth_exception_handler,
)
from blogku.errors.base import BASE_EXCEPTION, BaseAppError, create_exception_handler
from blogku.errors.cache import (
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheExceptionError,
    CacheKeyError,
    CacheSerializationError,
    cache_exception_handler,
)
from blogku.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    SlugConflictError,
    database_exception_handler,
)
from blogku.errors.upload import (
    StorageError,
    UnsupportedImageTypeError,
    upload_exception_handler,
)
from blogku.errors.validation import (
    InvalidInputError,
    invalid_input_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "BASE_EXCEPTION",
    "BaseAppError",
    "CacheCompressionError",
    "CacheDecompressionError",
    "CacheDeserializationError",
    "CacheExceptionError",
    "CacheKeyError",
    "CacheSerializationError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "InvalidInputError",
    "InvalidTokenError",
    "PasswordHashingError",
    "RecordNotFoundError",
    "SlugConflictError",
    "StorageError",
    "UnsupportedImageTypeError",
    "UserAuthenticationError",
    "auth_exception_handler",
    "cache_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "invalid_input_exception_handler",
    "upload_exception_handler",
    "validation_exception_handler",
]
