from __future__ import annotations

from .errors import (
    ConflictError,
    CorruptDataError,
    InvalidDocumentError,
    InvalidKeyError,
    KVStoreError,
    NotFoundError,
    StorageIOError,
)
from .interfaces import KeyValueStore, KVEntry
from .kv_store import KVStore
from .repositories import AsyncDiskKVRepository, AsyncKVRepository

__all__ = [
    "KVStore",
    "KeyValueStore",
    "KVEntry",
    "AsyncKVRepository",
    "AsyncDiskKVRepository",
    "KVStoreError",
    "ConflictError",
    "NotFoundError",
    "InvalidDocumentError",
    "InvalidKeyError",
    "CorruptDataError",
    "StorageIOError",
]
