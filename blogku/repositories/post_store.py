"""Post persistence with one committed transaction per call."""

from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from datetime import datetime
from enum import StrEnum

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from blogku.db import transaction
from blogku.errors import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)
from blogku.models import PostDB
from blogku.monitoring import get_logger
from blogku.utils.helpers import utc_now

logger = get_logger(__name__)


class PostField(StrEnum):
    """Columns an update is allowed to touch."""

    TITLE = "title"
    SLUG = "slug"
    CONTENT = "content"
    UPDATED_AT = "updated_at"


# Unique slug index on PostgreSQL, column reference in SQLite messages
SLUG_CONSTRAINT_MARKERS = ("ix_posts_slug", "posts.slug")


def _integrity_error(e: IntegrityError) -> DatabaseError:
    error_msg = str(e.orig) if e.orig else str(e)
    lowered = error_msg.lower()
    is_unique = "unique" in lowered or "duplicate" in lowered
    if is_unique and any(marker in lowered for marker in SLUG_CONSTRAINT_MARKERS):
        return DuplicateEntryError(detail="Slug already exists", field="slug")
    if is_unique:
        return DuplicateEntryError(detail=error_msg)
    return DatabaseError(detail=f"Database integrity error: {error_msg}")


class PostStore:
    """
    Durable post storage.

    Every method runs in its own short transaction that has committed by the
    time the method returns.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize the store.

        Args:
            session_maker: Factory producing async sessions.
        """
        self._session_maker = session_maker

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession]:
        """Open a transaction and translate driver errors."""
        try:
            async with transaction(self._session_maker) as session:
                yield session
        except IntegrityError as e:
            raise _integrity_error(e) from e
        except SQLAlchemyError as e:
            logger.exception("Post store operation failed")
            raise DatabaseError(detail=f"Database operation failed: {e.__class__.__name__}") from e
        except OSError as e:
            logger.exception("Post store unreachable")
            raise DatabaseConnectionError from e

    async def insert_post(
        self,
        title: str,
        content: str,
        slug: str,
        image_path: str,
        now: datetime | None = None,
    ) -> int:
        """
        Insert a post and return its id.

        The same timestamp is used for published, created and updated.

        Raises:
            DuplicateEntryError: If the slug is already taken.
        """
        now = now or utc_now()
        post = PostDB(
            title=title,
            content=content,
            slug=slug,
            image_path=image_path,
            published_at=now,
            created_at=now,
            updated_at=now,
        )
        async with self._session() as session:
            session.add(post)
            await session.flush()
            post_id = post.id
        if post_id is None:
            mssg = "Insert did not return a primary key"
            raise DatabaseError(mssg)
        return post_id

    async def count_posts(self) -> int:
        async with self._session() as session:
            result = await session.execute(select(func.count()).select_from(PostDB))
            return result.scalar_one()

    async def query_posts_page(self, limit: int, offset: int) -> list[PostDB]:
        """Fetch a page of posts, most recently published first, id breaking ties."""
        statement = (
            select(PostDB)
            .order_by(PostDB.published_at.desc(), PostDB.id.desc())  # type: ignore[attr-defined, union-attr]
            .limit(limit)
            .offset(offset)
        )
        async with self._session() as session:
            result = await session.execute(statement)
            return list(result.scalars().all())

    async def get_post_by_slug(self, slug: str) -> PostDB:
        """
        Fetch a post by slug.

        Raises:
            RecordNotFoundError: If no post has this slug.
        """
        async with self._session() as session:
            result = await session.execute(select(PostDB).where(PostDB.slug == slug))
            post = result.scalar_one_or_none()
        if post is None:
            raise RecordNotFoundError(detail=f"Post with slug '{slug}' not found")
        return post

    async def exists_slug(self, slug: str, exclude_id: int = 0) -> bool:
        """Return True if a post other than ``exclude_id`` uses ``slug``."""
        statement = select(1).where(PostDB.slug == slug, PostDB.id != exclude_id).limit(1)
        async with self._session() as session:
            result = await session.execute(statement)
            return result.scalar_one_or_none() is not None

    async def update_post_fields(
        self,
        post_id: int,
        changes: Mapping[PostField | str, object],
    ) -> None:
        """
        Update whitelisted columns of one post in a single statement.

        Args:
            post_id: Post to update.
            changes: New values keyed by ``PostField``.

        Raises:
            ValueError: If a key is not a ``PostField``.
            DuplicateEntryError: If the new slug is already taken.
            RecordNotFoundError: If the post does not exist.
        """
        if not changes:
            return
        values = {PostField(name).value: value for name, value in changes.items()}
        statement = update(PostDB).where(PostDB.id == post_id).values(values)  # type: ignore[arg-type]
        async with self._session() as session:
            result = await session.execute(statement)
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise RecordNotFoundError(detail=f"Post with ID {post_id} not found")

    async def get_post_slug_and_image(self, post_id: int) -> tuple[str, str]:
        """
        Return the slug and image file name of a post.

        Raises:
            RecordNotFoundError: If the post does not exist.
        """
        statement = select(PostDB.slug, PostDB.image_path).where(PostDB.id == post_id)
        async with self._session() as session:
            row = (await session.execute(statement)).one_or_none()
        if row is None:
            raise RecordNotFoundError(detail=f"Post with ID {post_id} not found")
        return row.slug, row.image_path

    async def delete_post(self, post_id: int) -> None:
        """
        Delete a post.

        Raises:
            RecordNotFoundError: If the post does not exist.
        """
        async with self._session() as session:
            result = await session.execute(delete(PostDB).where(PostDB.id == post_id))  # type: ignore[arg-type]
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise RecordNotFoundError(detail=f"Post with ID {post_id} not found")
