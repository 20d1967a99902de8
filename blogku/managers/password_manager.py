"""
Password hashing module using Argon2 with passlib's CryptContext.

Hashing is CPU-bound, so the async helpers run it in a thread pool.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from blogku.configs import CONFIG_MAP, settings
from blogku.errors import PasswordHashingError
from blogku.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


class PasswordHasher:
    """
    Password hashing and verification with Argon2id.

    pbkdf2_sha256 hashes are still verified and flagged for rehash.
    """

    def __init__(self, level: str | None = None) -> None:
        """
        Initialize the hasher.

        Args:
            level: Cost level from ``CONFIG_MAP``, the configured level by default.
        """
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        params = CONFIG_MAP[self.level]
        self.pwd_context = CryptContext(
            schemes=["argon2", "pbkdf2_sha256"],
            deprecated="pbkdf2_sha256",
            argon2__memory_cost=params.memory_cost,
            argon2__time_cost=params.time_cost,
            argon2__parallelism=params.parallelism,
        )
        logger.info("PasswordHasher initialized", level=self.level)

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password using Argon2id.

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If hashing fails
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a plaintext password against a hash. Malformed hashes never match."""
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except (ValueError, TypeError):
            logger.exception("Stored hash is corrupted or invalid format")
            return False

    def dummy_verify(self) -> None:
        """Spend the time of a verification when there is no user to check."""
        self.pwd_context.dummy_verify()

    def check_needs_rehash(self, hashed_password: str) -> bool:
        return self.pwd_context.needs_update(hashed_password)


_default_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """Get or create the default password hasher instance."""
    global _default_hasher  # noqa: PLW0603
    if _default_hasher is None:
        _default_hasher = PasswordHasher()
    return _default_hasher


async def hash_password(password: str) -> str:
    """Hash a password with the default hasher off the event loop."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


async def verify_password(password: str, hashed_password: str | None) -> bool:
    """
    Verify a password with the default hasher off the event loop.

    A missing hash still costs one verification so unknown accounts take as
    long as wrong passwords.
    """
    hasher = get_password_hasher()
    if hashed_password is None:
        await get_running_loop().run_in_executor(executor, hasher.dummy_verify)
        return False
    return await get_running_loop().run_in_executor(
        executor,
        hasher.verify,
        password,
        hashed_password,
    )
