# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from blogku.db import get_session, transaction
from blogku.dependencies import get_session_maker
from blogku.main import app
from blogku.managers.cache_manager import CacheManager
from blogku.managers.token_manager import create_access_token
from blogku.monitoring.side_effects import RecordingSideEffectSink
from blogku.services.storage import LocalImageStorage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def admin_token() -> str:
    """Create an admin access token for testing."""
    return create_access_token(1, expires_delta=timedelta(minutes=30))


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    """Create auth headers with an admin access token."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def image_file() -> dict[str, tuple[str, bytes, str]]:
    return {"image": ("cover.png", PNG_BYTES, "image/png")}


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    cache_manager: CacheManager,
    storage: LocalImageStorage,
    sink: RecordingSideEffectSink,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client wired to the per-test database, cache and storage."""

    async def session_override() -> AsyncGenerator[AsyncSession]:
        async with transaction(session_maker) as session:
            yield session

    app.dependency_overrides[get_session_maker] = lambda: session_maker
    app.dependency_overrides[get_session] = session_override
    app.state.cache_manager = cache_manager
    app.state.image_storage = storage
    app.state.side_effect_sink = sink

    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
