"""Cache manager for Redis with in-memory fallback."""

from time import perf_counter
from typing import Any

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from blogku.clients.memory_client import MemoryClient
from blogku.clients.protocols import CacheClientProtocol
from blogku.clients.redis_client import RedisClient
from blogku.configs import CacheConfig, settings
from blogku.data.statistics import CacheStatistics
from blogku.errors import (
    BASE_EXCEPTION,
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheKeyError,
    CacheSerializationError,
)
from blogku.monitoring import get_logger
from blogku.utils.cache_serializer import (
    compress,
    decompress,
    deserialize,
    do_compress,
    serialize,
)

logger = get_logger(__name__)

CLIENT_ERRORS = (RedisError, *BASE_EXCEPTION)

# Keys deleted per round trip during pattern sweeps
DELETE_BATCH_SIZE = 1000


class CacheManager:
    """
    Cache manager for namespaced JSON values.

    Features:
        - Automatic fallback to in-memory cache when Redis is unavailable
        - Namespaced keys under a global prefix
        - Pattern sweeps via incremental SCAN
        - Compression for large values
        - Statistics tracking

    Every client failure surfaces as ``CacheKeyError`` so callers can decide
    whether a cache problem is fatal.
    """

    def __init__(
        self,
        cache_config: CacheConfig | None = None,
        client: CacheClientProtocol | None = None,
    ) -> None:
        """
        Initialize cache manager.

        Args:
            cache_config: Cache tuning, read from CACHE_* env vars by default.
            client: Use this client as-is instead of connecting on initialize.
        """
        self.cache_config = cache_config or CacheConfig()
        self.redis_client = RedisClient()
        self.memory_client = MemoryClient()
        self._injected = client is not None
        self._client: CacheClientProtocol = client or self.memory_client
        self.is_redis_available = isinstance(client, RedisClient)
        self.statistics = CacheStatistics()

    @property
    def backend(self) -> str:
        return "redis" if self.is_redis_available else "in-memory"

    async def initialize(self) -> None:
        """
        Initialize cache manager by connecting to Redis.

        If Redis is disabled or the connection fails, it falls back to an
        in-memory cache.
        """
        if self._injected:
            logger.info("Cache manager using injected client", backend=self.backend)
            return
        try:
            if settings.REDIS_ENABLED:
                await self.redis_client.connect()
                self._client = self.redis_client
                self.is_redis_available = True
                logger.info("Cache manager initialized", backend=self.backend)
                return
            logger.info("Redis disabled, using in-memory cache")
        except RedisConnectionError as e:
            logger.warning("Redis connection failed, falling back to in-memory cache", error=str(e))
        self._client = self.memory_client
        self.is_redis_available = False
        await self.memory_client.start_lifecycle()
        logger.info("Cache manager initialized", backend=self.backend)

    async def shutdown(self) -> None:
        """Shutdown cache manager by closing the client connections."""
        if isinstance(self._client, RedisClient):
            await self._client.disconnect()
        await self.memory_client.close()
        logger.info("Cache manager shutdown successfully")

    def _build_key(self, key: str, namespace: str | None = None) -> str:
        """Build full cache key with prefix and namespace."""
        prefix = self.cache_config.key_prefix
        return f"{prefix}:{namespace}:{key}" if namespace else f"{prefix}:{key}"

    async def get(self, key: str, namespace: str | None = None) -> Any | None:  # noqa: ANN401
        """
        Get value from cache.

        Returns:
            The deserialized value, or None on a miss.

        Raises:
            CacheKeyError: If the client fails or the stored value is unreadable.
        """
        full_key = self._build_key(key, namespace)
        try:
            cached_value = await self._client.get(full_key)
            if cached_value is None:
                self.statistics.record_miss()
                return None

            self.statistics.record_hit()
            self.statistics.record_read(len(cached_value.encode("utf-8")))
            return deserialize(decompress(cached_value))
        except (CacheDecompressionError, CacheDeserializationError, *CLIENT_ERRORS) as e:
            logger.warning("Cache get failed", key=full_key, error=str(e))
            self.statistics.record_error()
            mssg = f"Cache get failed for key {key}"
            raise CacheKeyError(mssg) from e

    async def set(
        self,
        key: str,
        value: object,
        ttl: int | None = None,
        namespace: str | None = None,
    ) -> bool:
        """
        Set value in cache.

        Args:
            key: Cache key within the namespace.
            value: JSON-serializable value.
            ttl: Expiry in seconds, capped at ``max_ttl``.
            namespace: Optional key namespace.

        Raises:
            CacheKeyError: If serialization or the client fails.
        """
        full_key = self._build_key(key, namespace)
        try:
            serialized = serialize(value)
            if self.cache_config.compression_enabled and do_compress(
                serialized,
                self.cache_config.compression_threshold,
            ):
                serialized = compress(serialized)

            ex = ttl if ttl is not None else self.cache_config.default_ttl
            ex = min(ex, self.cache_config.max_ttl)

            success = await self._client.set(full_key, serialized, ex=ex)
            self.statistics.record_set(len(serialized.encode("utf-8")))
        except (CacheSerializationError, CacheCompressionError, *CLIENT_ERRORS) as e:
            logger.warning("Cache set failed", key=full_key, error=str(e))
            self.statistics.record_error()
            mssg = f"Cache set failed for key {key}"
            raise CacheKeyError(mssg) from e
        return success

    async def delete(self, *keys: str, namespace: str | None = None) -> int:
        """Delete keys from cache."""
        full_keys = [self._build_key(key, namespace) for key in keys]
        try:
            deleted_count = await self._client.delete(*full_keys)
        except CLIENT_ERRORS as e:
            logger.warning("Cache delete failed", keys=full_keys, error=str(e))
            self.statistics.record_error()
            mssg = "Cache delete failed"
            raise CacheKeyError(mssg) from e
        if deleted_count:
            self.statistics.record_delete(deleted_count)
        return deleted_count

    async def delete_pattern(self, pattern: str, namespace: str | None = None) -> int:
        """
        Delete every key matching a glob pattern.

        Keys are collected with an incremental scan and removed in batches.

        Args:
            pattern: Glob pattern relative to the namespace, e.g. ``list:*``.
            namespace: Optional key namespace.

        Returns:
            Number of keys removed.

        Raises:
            CacheKeyError: If scanning or deleting fails.
        """
        full_pattern = self._build_key(pattern, namespace)
        start = perf_counter()
        deleted_total = 0
        batch: list[str] = []
        try:
            async for key in self._client.scan_iter(full_pattern):
                batch.append(key)
                if len(batch) >= DELETE_BATCH_SIZE:
                    deleted_total += await self._client.delete(*batch)
                    batch = []
            if batch:
                deleted_total += await self._client.delete(*batch)
        except CLIENT_ERRORS as e:
            logger.warning("Cache pattern delete failed", pattern=full_pattern, error=str(e))
            self.statistics.record_error()
            mssg = f"Cache pattern delete failed for {pattern}"
            raise CacheKeyError(mssg) from e

        if deleted_total:
            self.statistics.record_delete(deleted_total)
        logger.debug(
            "Cache pattern delete",
            pattern=full_pattern,
            deleted=deleted_total,
            elapsed_ms=round((perf_counter() - start) * 1000, 2),
        )
        return deleted_total

    async def ping(self) -> bool:
        """Ping the cache server."""
        try:
            return await self._client.ping()
        except CLIENT_ERRORS:
            logger.exception("Cache ping failed")
            return False

    async def health_check(self) -> dict[str, Any]:
        """
        Perform a health check.

        Returns:
            Dictionary with backend, status and statistics.
        """
        result: dict[str, Any] = {
            "backend": self.backend,
            "statistics": self.get_statistics(),
        }
        start = perf_counter()
        try:
            healthy = await self._client.ping()
            result["status"] = "healthy" if healthy else "unhealthy"
            result["latency_ms"] = round((perf_counter() - start) * 1000, 2)
        except CLIENT_ERRORS as e:
            result["status"] = "unhealthy"
            result["error"] = str(e)
        return result

    def get_statistics(self) -> dict[str, int | float | str]:
        """Get cache statistics."""
        return self.statistics.to_dict()

    def reset_statistics(self) -> None:
        """Reset cache statistics."""
        self.statistics.reset()
        logger.info("Cache statistics reset")
