"""In-memory cache client for fallback when Redis is not available."""

from asyncio import CancelledError, Lock, Task, create_task
from asyncio import sleep as asyncio_sleep
from collections import OrderedDict
from collections.abc import AsyncGenerator
from contextlib import suppress
from fnmatch import fnmatchcase
from sys import getsizeof
from time import monotonic

from blogku.monitoring import get_logger

logger = get_logger(__name__)


class MemoryClient:
    """
    An asynchronous in-memory cache client that mimics RedisClient.

    Features:
        - Active expiration via background cleanup task
        - Memory limits with LRU eviction
        - Entry count limits
        - Safe for concurrent tasks via asyncio.Lock
        - Pattern-based key scanning
    """

    DEFAULT_MAX_ENTRIES: int = 100_000
    DEFAULT_MAX_MEMORY_MB: int = 100
    DEFAULT_CLEANUP_INTERVAL: int = 60  # seconds

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_memory_mb: int = DEFAULT_MAX_MEMORY_MB,
        cleanup_interval: int = DEFAULT_CLEANUP_INTERVAL,
    ) -> None:
        """
        Initialize the MemoryClient with configurable limits.

        Args:
            max_entries: Maximum number of cache entries before LRU eviction.
            max_memory_mb: Maximum memory usage in megabytes before eviction.
            cleanup_interval: Interval in seconds for background cleanup.
        """
        self._cache: OrderedDict[str, str] = OrderedDict()
        self._expires_at: dict[str, float] = {}
        self.is_connected: bool = True
        self._cleanup_task: Task[None] | None = None

        self._max_entries = max_entries
        self._max_memory_bytes = max_memory_mb * 1024 * 1024
        self._cleanup_interval = cleanup_interval
        self._current_memory: int = 0

        self._lock = Lock()

    async def start_lifecycle(self) -> None:
        """Start background maintenance tasks."""
        async with self._lock:
            self.is_connected = True
            if not self._cleanup_task:
                self._cleanup_task = create_task(self._cleanup_loop())
                logger.info("MemoryClient active expiration task started")

    async def _cleanup_loop(self) -> None:
        """Background loop to remove expired keys."""
        while self.is_connected:
            try:
                await asyncio_sleep(self._cleanup_interval)
                await self._active_expire()
            except CancelledError:
                break
            except Exception:
                logger.exception("Error in memory cleanup loop")

    async def _active_expire(self) -> None:
        async with self._lock:
            expired = [k for k in self._expires_at if self._is_expired(k)]
            if expired:
                count = self._delete_internal(*expired)
                logger.debug("Memory cleanup removed expired keys", count=count)

    def _is_expired(self, key: str) -> bool:
        """Check if a key has expired (caller holds the lock)."""
        deadline = self._expires_at.get(key)
        return deadline is not None and monotonic() >= deadline

    @staticmethod
    def _estimate_entry_size(key: str, value: str) -> int:
        return getsizeof(key) + getsizeof(value)

    def _evict_oldest(self) -> None:
        if self._cache:
            key, value = self._cache.popitem(last=False)
            self._current_memory -= self._estimate_entry_size(key, value)
            self._expires_at.pop(key, None)

    def _delete_internal(self, *keys: str) -> int:
        count = 0
        for key in keys:
            if key in self._cache:
                value = self._cache.pop(key)
                self._current_memory -= self._estimate_entry_size(key, value)
                self._expires_at.pop(key, None)
                count += 1
        return count

    async def get(self, key: str) -> str | None:
        """Get a value from the cache."""
        async with self._lock:
            if self._is_expired(key):
                self._delete_internal(key)
                return None
            value = self._cache.get(key)
            if value is not None:
                self._cache.move_to_end(key)
            return value

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        """Set a value in the cache with optional TTL and automatic eviction."""
        async with self._lock:
            self._delete_internal(key)
            entry_size = self._estimate_entry_size(key, value)

            while self._cache and (
                len(self._cache) >= self._max_entries
                or self._current_memory + entry_size > self._max_memory_bytes
            ):
                self._evict_oldest()

            self._cache[key] = value
            self._current_memory += entry_size
            # Redis SET without KEEPTTL drops any previous TTL
            if ex:
                self._expires_at[key] = monotonic() + ex
            return True

    async def delete(self, *keys: str) -> int:
        """Delete one or more keys from the cache."""
        async with self._lock:
            return self._delete_internal(*keys)

    async def exists(self, *keys: str) -> int:
        """Count how many of the given keys exist."""
        async with self._lock:
            return sum(1 for key in keys if key in self._cache and not self._is_expired(key))

    async def flush_all(self) -> bool:
        """Clear the entire cache."""
        async with self._lock:
            self._cache.clear()
            self._expires_at.clear()
            self._current_memory = 0
            return True

    async def ping(self) -> bool:
        """Check if the cache is alive."""
        return self.is_connected

    async def info(self) -> dict[str, str | int]:
        """Get information about the in-memory cache."""
        async with self._lock:
            return {
                "server": "In-Memory Cache",
                "used_memory_bytes": self._current_memory,
                "used_memory_human": f"{self._current_memory / 1024 / 1024:.2f}MB",
                "total_keys": len(self._cache),
                "max_entries": self._max_entries,
                "max_memory_mb": self._max_memory_bytes // 1024 // 1024,
            }

    async def ttl(self, key: str) -> int:
        """Remaining TTL in seconds, -1 without expiry, -2 when missing (Redis semantics)."""
        async with self._lock:
            if self._is_expired(key):
                self._delete_internal(key)
                return -2
            if key not in self._cache:
                return -2
            if key not in self._expires_at:
                return -1
            return int(self._expires_at[key] - monotonic())

    async def expire(self, key: str, seconds: int) -> bool:
        """Set an expiration time on a key."""
        async with self._lock:
            if key in self._cache:
                self._expires_at[key] = monotonic() + seconds
                return True
            return False

    async def scan_iter(
        self,
        pattern: str,
        count: int = 100,  # noqa: ARG002 - kept for API compatibility with RedisClient
    ) -> AsyncGenerator[str]:
        """
        Yield keys matching the pattern.

        Uses case-sensitive fnmatch, like Redis glob matching.
        """
        async with self._lock:
            keys = [k for k in self._cache if not self._is_expired(k)]

        for key in keys:
            if fnmatchcase(key, pattern):
                yield key

    async def close(self) -> None:
        """Stop the client and cleanup tasks."""
        async with self._lock:
            self.is_connected = False
            task, self._cleanup_task = self._cleanup_task, None
        if task:
            task.cancel()
            with suppress(CancelledError):
                await task
