"""Redis client module for cache operations."""

from collections.abc import AsyncGenerator, Awaitable
from typing import Any

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from blogku.configs import pool_kwargs
from blogku.monitoring import get_logger

logger = get_logger(__name__)


class RedisClient:
    """Async Redis client wrapper with connection pooling."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        """
        Initialize Redis client.

        Args:
            config: Connection pool keyword arguments. Defaults to the values
                derived from REDIS_* settings.
        """
        self.config = config if config is not None else pool_kwargs
        self._pool: ConnectionPool | None = None
        self._redis: Redis | None = None

    async def connect(self) -> None:
        """Establish Redis connection pool."""
        try:
            self._pool = ConnectionPool(**self.config)
            self._redis = Redis(connection_pool=self._pool)
            ping_result = self._redis.ping()
            result = await ping_result if isinstance(ping_result, Awaitable) else ping_result
            if not result:
                mssg = "Redis ping returned False"
                raise RedisConnectionError(mssg)
            logger.info("Redis connection successful, cache is using Redis")
        except (ConnectionError, RedisTimeoutError, RedisError) as e:
            logger.exception("Failed to connect to Redis")
            mssg = f"Cannot connect to Redis at {self.config.get('host')}:{self.config.get('port')}"
            raise RedisConnectionError(mssg) from e

    async def disconnect(self) -> None:
        """Close Redis connection pool."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            logger.info("Redis connection closed")

    @property
    def client(self) -> Redis:
        """Get Redis client instance."""
        if self._redis is None:
            mssg = "Redis client not initialized. Call connect() first."
            raise RuntimeError(mssg)
        return self._redis

    async def get(self, key: str) -> str | None:
        """Get value from cache."""
        try:
            return await self.client.get(key)
        except RedisError as e:
            logger.exception("Failed to get key", key=key)
            mssg = f"Cache get operation failed for key {key}: {e}"
            raise RedisConnectionError(mssg) from e

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        """Set value in cache."""
        try:
            return bool(await self.client.set(key, value, ex=ex))
        except RedisError as e:
            logger.exception("Failed to set key", key=key)
            mssg = f"Cache set operation failed for key {key}: {e}"
            raise RedisConnectionError(mssg) from e

    async def delete(self, *keys: str) -> int:
        """Delete keys from cache."""
        if not keys:
            return 0
        try:
            return await self.client.delete(*keys)
        except RedisError as e:
            logger.exception("Failed to delete keys", keys=keys)
            mssg = f"Cache delete operation failed for keys {keys}: {e}"
            raise RedisConnectionError(mssg) from e

    async def ping(self) -> bool:
        """Ping Redis server."""
        try:
            ping_result = self.client.ping()
            if isinstance(ping_result, Awaitable):
                return await ping_result
        except RedisError as e:
            logger.exception("Failed to ping Redis")
            mssg = f"Cache ping operation failed: {e}"
            raise RedisConnectionError(mssg) from e
        return ping_result

    async def info(self) -> dict[str, Any]:
        """Get Redis server info."""
        try:
            info = await self.client.info()
            return info if isinstance(info, dict) else {}
        except RedisError as e:
            logger.exception("Failed to get server info")
            mssg = f"Cache info operation failed: {e}"
            raise RedisConnectionError(mssg) from e

    async def scan_iter(self, pattern: str, count: int = 100) -> AsyncGenerator[str]:
        """Yield keys matching the pattern without loading the keyspace into memory."""
        cursor = 0
        while True:
            try:
                cursor, keys = await self.client.scan(cursor, match=pattern, count=count)
            except RedisError as e:
                logger.exception("Failed to scan keys", pattern=pattern)
                mssg = f"Cache scan_iter operation failed for pattern {pattern}: {e}"
                raise RedisConnectionError(mssg) from e

            for key in keys:
                yield key.decode("utf-8") if isinstance(key, bytes) else key

            if cursor == 0:
                break
