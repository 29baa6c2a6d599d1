from __future__ import annotations

import asyncio
from typing import Any, Protocol

from .interfaces import KVEntry
from .kv_store import DEFAULT_LIST_LIMIT, KVStore


class AsyncKVRepository(Protocol):
    async def create(self, value: Any) -> str: ...
    async def create_with_key(self, key: str, value: Any) -> str: ...
    async def upsert(self, key: str, value: Any) -> None: ...

    async def get(self, key: str) -> Any: ...
    async def delete(self, key: str) -> None: ...
    async def list(self, skip: int = 0, limit: int = DEFAULT_LIST_LIMIT) -> list[KVEntry]: ...

    async def count(self) -> int: ...


class AsyncDiskKVRepository(AsyncKVRepository):
    """
    Async wrapper around the disk-backed KVStore.
    Uses asyncio.to_thread so lock waits and snapshot writes never block the event loop.
    """

    def __init__(self, store: KVStore) -> None:
        self._store = store

    @property
    def store(self) -> KVStore:
        return self._store

    async def create(self, value: Any) -> str:
        return await asyncio.to_thread(self._store.create, value)

    async def create_with_key(self, key: str, value: Any) -> str:
        return await asyncio.to_thread(self._store.create_with_key, key, value)

    async def upsert(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._store.upsert, key, value)

    async def get(self, key: str) -> Any:
        return await asyncio.to_thread(self._store.get, key)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._store.delete, key)

    async def list(self, skip: int = 0, limit: int = DEFAULT_LIST_LIMIT) -> list[KVEntry]:
        return await asyncio.to_thread(self._store.list, skip, limit)

    async def count(self) -> int:
        return await asyncio.to_thread(len, self._store)
