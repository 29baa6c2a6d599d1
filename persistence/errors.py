from __future__ import annotations

from pathlib import Path


class KVStoreError(Exception):
    """Base class for every error raised by the key-value store."""


class ConflictError(KVStoreError):
    def __init__(self, key: str):
        super().__init__(f"Key already exists: {key}")
        self.key = key


class NotFoundError(KVStoreError):
    """
    Raised for a missing key, or for a list window that collected nothing.

    `key` is None for the list case: an empty store, a skip past the end and a
    zero limit all look the same to the caller.
    """

    def __init__(self, key: str | None = None):
        super().__init__(f"Key not found: {key}" if key is not None else "No keys found")
        self.key = key


class InvalidDocumentError(KVStoreError):
    """Value cannot be stored as a strict JSON document."""


class CorruptDataError(KVStoreError):
    def __init__(self, line_no: int, reason: str):
        super().__init__(f"Corrupt record on line {line_no}: {reason}")
        self.line_no = line_no
        self.reason = reason


class StorageIOError(KVStoreError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Storage error for {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidKeyError(KVStoreError):
    """Key is empty or contains characters the file format cannot hold."""
