"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from blogku.configs import settings
from blogku.monitoring import get_logger

logger = get_logger(__name__)

STATEMENT_TIMEOUT_MS = 30000


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for ``url``.

    PostgreSQL URLs get the pool settings and server-side statement timeouts;
    other backends (SQLite in tests) use their dialect defaults.

    Args:
        url: SQLAlchemy database URL.
        echo: Log every emitted statement.

    Returns:
        AsyncEngine: The configured engine.
    """
    kwargs: dict[str, Any] = {"echo": echo}
    if make_url(url).get_backend_name() == "postgresql":
        kwargs.update(
            pool_size=settings.POOL_SIZE,
            max_overflow=settings.MAX_OVERFLOW,
            pool_timeout=settings.POOL_TIMEOUT,
            pool_recycle=settings.POOL_RECYCLE,
            pool_pre_ping=True,
            connect_args={
                "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
                "server_settings": {
                    "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                    "lock_timeout": str(STATEMENT_TIMEOUT_MS),
                },
            },
        )
    engine = create_async_engine(url, **kwargs)
    if settings.DEBUG:
        _configure_engine_events(engine)
    return engine


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine: AsyncEngine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
async_session_maker = build_session_maker(engine)


@asynccontextmanager
async def transaction(
    session_maker: async_sessionmaker[SQLModelAsyncSession] | None = None,
) -> AsyncGenerator[SQLModelAsyncSession]:
    """
    Context manager for explicit transaction management.

    Commits on successful exit, rolls back on exception.

    Args:
        session_maker: Session factory, the module default when omitted.

    Yields:
        AsyncSession: Database session within a transaction
    """
    maker = session_maker or async_session_maker
    async with maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


async def init_db(db_engine: AsyncEngine | None = None) -> None:
    """
    Create all tables.

    Development convenience; production schemas are managed with Alembic.
    """
    target = db_engine or engine
    async with target.begin() as conn:
        from blogku.models import AdminDB, PostDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database initialized successfully")


async def ping_db(db_engine: AsyncEngine | None = None) -> bool:
    """Return True when a trivial query succeeds."""
    try:
        async with (db_engine or engine).connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database ping failed", error=str(e))
        return False
    return True


async def close_db() -> None:
    """Dispose of the connection pool on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
