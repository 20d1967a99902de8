"""Admin authentication service."""

from blogku.errors import DuplicateEntryError, InvalidCredentialsError
from blogku.managers.password_manager import hash_password, verify_password
from blogku.managers.token_manager import create_access_token
from blogku.monitoring import get_logger
from blogku.repositories.admin import AdminRepository
from blogku.schemas.admin import AdminCreate, AdminResponse, LoginResponse

logger = get_logger(__name__)

ADMIN_ROLE = "admin"


class AuthService:
    """Service for admin login and account creation."""

    def __init__(self, admin_repo: AdminRepository) -> None:
        """
        Initialize the auth service.

        Args:
            admin_repo: Admin repository for database operations
        """
        self.admin_repo = admin_repo

    async def login(self, identifier: str, password: str) -> LoginResponse:
        """
        Authenticate an admin and issue an access token.

        Args:
            identifier: Email address or username
            password: Plaintext password

        Returns:
            LoginResponse: Admin fields plus the signed token

        Raises:
            InvalidCredentialsError: If the admin is unknown or the password is wrong
        """
        admin = await self.admin_repo.get_for_auth(identifier)
        hashed = admin.password if admin else None
        if not await verify_password(password, hashed) or admin is None or admin.id is None:
            logger.info("Admin login rejected")
            raise InvalidCredentialsError

        token = create_access_token(admin.id, ADMIN_ROLE)
        logger.info("Admin logged in", admin_id=admin.id)
        return LoginResponse(id=admin.id, username=admin.username, email=admin.email, token=token)

    async def create_admin(self, payload: AdminCreate) -> AdminResponse:
        """
        Register a new admin.

        Raises:
            DuplicateEntryError: If username or email already exists
        """
        if await self.admin_repo.exists(payload.username, payload.email):
            mssg = "Username or email already exists"
            raise DuplicateEntryError(mssg)

        password_hash = await hash_password(payload.password.get_secret_value())
        admin = await self.admin_repo.create(payload.username, payload.email, password_hash)
        logger.info("Admin created", admin_id=admin.id, username=admin.username)
        return AdminResponse.model_validate(admin)
