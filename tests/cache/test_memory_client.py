"""Tests for the in-memory cache client."""

import pytest

from blogku.clients.memory_client import MemoryClient
from blogku.clients.protocols import CacheClientProtocol


def test_conforms_to_protocol(memory_client: MemoryClient) -> None:
    assert isinstance(memory_client, CacheClientProtocol)


@pytest.mark.asyncio
async def test_set_and_get(memory_client: MemoryClient) -> None:
    await memory_client.set("key", "value")
    assert await memory_client.get("key") == "value"
    assert await memory_client.get("missing") is None


@pytest.mark.asyncio
async def test_delete_counts_removed_keys(memory_client: MemoryClient) -> None:
    await memory_client.set("a", "1")
    await memory_client.set("b", "2")

    assert await memory_client.delete("a", "b", "c") == 2
    assert await memory_client.exists("a", "b") == 0


@pytest.mark.asyncio
async def test_ttl_follows_redis_conventions(
    memory_client: MemoryClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    now = 1000.0
    monkeypatch.setattr("blogku.clients.memory_client.monotonic", lambda: now)

    await memory_client.set("forever", "v")
    await memory_client.set("short", "v", ex=60)

    assert await memory_client.ttl("missing") == -2
    assert await memory_client.ttl("forever") == -1
    assert await memory_client.ttl("short") == 60


@pytest.mark.asyncio
async def test_expired_keys_are_not_served(
    memory_client: MemoryClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    clock = {"now": 1000.0}
    monkeypatch.setattr("blogku.clients.memory_client.monotonic", lambda: clock["now"])

    await memory_client.set("key", "value", ex=10)
    clock["now"] += 11

    assert await memory_client.get("key") is None
    assert await memory_client.exists("key") == 0


@pytest.mark.asyncio
async def test_set_without_ttl_clears_previous_expiry(memory_client: MemoryClient) -> None:
    await memory_client.set("key", "v1", ex=30)
    await memory_client.set("key", "v2")

    assert await memory_client.ttl("key") == -1


@pytest.mark.asyncio
async def test_lru_eviction_on_entry_limit() -> None:
    client = MemoryClient(max_entries=2)
    await client.set("a", "1")
    await client.set("b", "2")
    await client.get("a")  # a becomes most recently used
    await client.set("c", "3")

    assert await client.get("b") is None
    assert await client.get("a") == "1"
    assert await client.get("c") == "3"


@pytest.mark.asyncio
async def test_scan_iter_matches_glob(memory_client: MemoryClient) -> None:
    for key in ("blogku:blog:list:page:1:limit:10", "blogku:blog:list:page:2:limit:10", "blogku:blog:slug:x"):
        await memory_client.set(key, "v")

    keys = [key async for key in memory_client.scan_iter("blogku:blog:list:*")]

    assert sorted(keys) == ["blogku:blog:list:page:1:limit:10", "blogku:blog:list:page:2:limit:10"]


@pytest.mark.asyncio
async def test_lifecycle_start_and_close(memory_client: MemoryClient) -> None:
    await memory_client.start_lifecycle()
    assert await memory_client.ping() is True

    await memory_client.close()

    assert await memory_client.ping() is False
    assert memory_client._cleanup_task is None


@pytest.mark.asyncio
async def test_flush_all_and_info(memory_client: MemoryClient) -> None:
    await memory_client.set("a", "1")
    await memory_client.set("b", "2")
    assert (await memory_client.info())["total_keys"] == 2

    await memory_client.flush_all()

    info = await memory_client.info()
    assert info["total_keys"] == 0
    assert info["used_memory_bytes"] == 0
