"""Key-value storage — the only persistence the service relies on.

Repositories receive a KeyValueStore instead of reaching for global state,
so tests run against MemoryStore and production against Redis.

Usage:
    store = create_store(settings.storage)
    await store.put("schemes", payload)
    raw = await store.get("schemes")
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

import redis.asyncio as aioredis
from redis.asyncio.lock import Lock as RedisLock

from yogyatha.config import StorageSettings
from yogyatha.models.enums import StorageBackend

logger = logging.getLogger(__name__)

# Redis lock lifetime and how long a writer waits for it, in seconds
LOCK_TIMEOUT = 10
LOCK_WAIT = 5


class KeyValueStore(Protocol):
    """String values under string keys, plus append-only lists."""

    async def get(self, key: str) -> str | None: ...

    async def put(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> bool: ...

    async def append(self, key: str, value: str) -> None: ...

    async def read_list(self, key: str) -> list[str]: ...

    async def close(self) -> None: ...

    def lock(self, key: str) -> AbstractAsyncContextManager[Any]:
        """Mutual exclusion for a read-modify-write of `key`."""
        ...


class MemoryStore:
    """Dict-backed store for development and tests. Not shared across processes."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._lists: dict[str, list[str]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def put(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> bool:
        found = key in self._values or key in self._lists
        self._values.pop(key, None)
        self._lists.pop(key, None)
        return found

    async def append(self, key: str, value: str) -> None:
        self._lists.setdefault(key, []).append(value)

    async def read_list(self, key: str) -> list[str]:
        return list(self._lists.get(key, []))

    async def close(self) -> None:
        return None

    def lock(self, key: str) -> asyncio.Lock:
        return self._locks.setdefault(key, asyncio.Lock())


class RedisStore:
    """Redis-backed store. Lists map to RPUSH / LRANGE so appends are atomic."""

    def __init__(self, client: aioredis.Redis, key_prefix: str = "yogyatha") -> None:
        self._redis = client
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> str | None:
        return await self._redis.get(self._key(key))

    async def put(self, key: str, value: str) -> None:
        await self._redis.set(self._key(key), value)

    async def delete(self, key: str) -> bool:
        return bool(await self._redis.delete(self._key(key)))

    async def append(self, key: str, value: str) -> None:
        await self._redis.rpush(self._key(key), value)

    async def read_list(self, key: str) -> list[str]:
        return list(await self._redis.lrange(self._key(key), 0, -1))

    async def close(self) -> None:
        await self._redis.aclose()

    def lock(self, key: str) -> RedisLock:
        """Redis lock shared by every worker process using this prefix."""
        return self._redis.lock(self._key(f"lock:{key}"), timeout=LOCK_TIMEOUT, blocking_timeout=LOCK_WAIT)


def create_store(storage: StorageSettings) -> KeyValueStore:
    """Build the configured store."""
    if storage.storage_backend == StorageBackend.REDIS:
        logger.info("Using Redis store at %s", storage.redis_url)
        client = aioredis.from_url(storage.redis_url, decode_responses=True)
        return RedisStore(client, key_prefix=storage.key_prefix)

    logger.info("Using in-memory store")
    return MemoryStore()
