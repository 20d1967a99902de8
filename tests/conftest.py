# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
from collections.abc import AsyncGenerator
from pathlib import Path
from tempfile import mkdtemp

# Settings are read at import time, so the environment must be ready before
# anything from blogku is imported
_TEST_DIR = Path(mkdtemp(prefix="blogku-tests-"))
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'app.db'}"
os.environ["UPLOADS_DIR"] = str(_TEST_DIR / "uploads")
os.environ["REDIS_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"

import pytest  # noqa: E402
from redis.exceptions import ConnectionError as RedisConnectionError  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from blogku.clients.memory_client import MemoryClient  # noqa: E402
from blogku.configs import ContentConfig  # noqa: E402
from blogku.db import build_engine, build_session_maker, init_db  # noqa: E402
from blogku.managers.cache_manager import CacheManager  # noqa: E402
from blogku.monitoring.side_effects import RecordingSideEffectSink  # noqa: E402
from blogku.repositories import ContentRepository, PostStore  # noqa: E402
from blogku.services.storage import LocalImageStorage  # noqa: E402


class BrokenCacheClient:
    """Cache client whose every call fails like an unreachable Redis."""

    async def get(self, key: str) -> str | None:
        raise RedisConnectionError("cache down")

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        raise RedisConnectionError("cache down")

    async def delete(self, *keys: str) -> int:
        raise RedisConnectionError("cache down")

    async def ping(self) -> bool:
        raise RedisConnectionError("cache down")

    async def info(self) -> dict:
        raise RedisConnectionError("cache down")

    async def scan_iter(self, pattern: str, count: int = 100) -> AsyncGenerator[str]:
        raise RedisConnectionError("cache down")
        yield pattern  # pragma: no cover


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """File-backed SQLite engine with the full schema, one per test."""
    db_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(db_engine)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(engine)


@pytest.fixture
def post_store(session_maker: async_sessionmaker[AsyncSession]) -> PostStore:
    return PostStore(session_maker)


@pytest.fixture
def memory_client() -> MemoryClient:
    """In-memory cache client, no Redis required."""
    return MemoryClient()


@pytest.fixture
def cache_manager(memory_client: MemoryClient) -> CacheManager:
    return CacheManager(client=memory_client)


@pytest.fixture
def broken_cache_manager() -> CacheManager:
    return CacheManager(client=BrokenCacheClient())


@pytest.fixture
def sink() -> RecordingSideEffectSink:
    return RecordingSideEffectSink()


@pytest.fixture
def storage(tmp_path: Path) -> LocalImageStorage:
    return LocalImageStorage(tmp_path / "uploads")


@pytest.fixture
def content_config() -> ContentConfig:
    return ContentConfig(max_slug_probes=100)


@pytest.fixture
def repo(
    post_store: PostStore,
    cache_manager: CacheManager,
    storage: LocalImageStorage,
    sink: RecordingSideEffectSink,
    content_config: ContentConfig,
) -> ContentRepository:
    """Content repository wired to SQLite, the memory cache and a temp upload dir."""
    return ContentRepository(post_store, cache_manager, storage, sink=sink, config=content_config)
