"""Admin repository for database operations."""

from typing import cast

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement

from blogku.errors import DatabaseError, DuplicateEntryError
from blogku.models import AdminDB


class AdminRepository:
    """
    Repository for admin accounts.

    Admin records are never cached.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_for_auth(self, identifier: str) -> AdminDB | None:
        """
        Get an admin by email or username.

        Args:
            identifier: Email address or username

        Returns:
            AdminDB | None: Admin if found, None otherwise
        """
        result = await self.session.execute(
            select(AdminDB).where(
                or_(
                    cast(ColumnElement[bool], AdminDB.email == identifier),
                    cast(ColumnElement[bool], AdminDB.username == identifier),
                ),
            ),
        )
        return result.scalars().first()

    async def exists(self, username: str, email: str) -> bool:
        """Return True if the username or the email is already registered."""
        result = await self.session.execute(
            select(1)
            .where(
                or_(
                    cast(ColumnElement[bool], AdminDB.username == username),
                    cast(ColumnElement[bool], AdminDB.email == email),
                ),
            )
            .limit(1),
        )
        return result.scalar_one_or_none() is not None

    async def create(self, username: str, email: str, password_hash: str) -> AdminDB:
        """
        Create a new admin.

        Raises:
            DuplicateEntryError: If username or email already exists
            DatabaseError: For other integrity errors
        """
        admin = AdminDB(username=username, email=email, password=password_hash)
        try:
            self.session.add(admin)
            await self.session.flush()
            await self.session.refresh(admin)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "username" in error_msg.lower():
                raise DuplicateEntryError(
                    detail=f"Username '{username}' already exists",
                    field="username",
                ) from e
            if "email" in error_msg.lower():
                raise DuplicateEntryError(
                    detail=f"Email '{email}' already exists",
                    field="email",
                ) from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        return admin
