from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel


class KVEntry(BaseModel):
    """One listed entry: the key and its stored document."""

    key: str
    data: Any = None


class KeyValueStore(Protocol):
    """
    The only way to reach the map. Implementations own it for the process
    lifetime and are free to pick their own locking strategy.
    """

    def create(self, value: Any) -> str:
        """Insert under a freshly generated key and return that key."""
        ...

    def create_with_key(self, key: str, value: Any) -> str:
        """Insert under `key`; ConflictError if it is taken."""
        ...

    def upsert(self, key: str, value: Any) -> None:
        """Insert or replace the whole value for `key`."""
        ...

    def get(self, key: str) -> Any:
        ...

    def delete(self, key: str) -> None:
        ...

    def list(self, skip: int = 0, limit: int = 1000) -> list[KVEntry]:
        ...
