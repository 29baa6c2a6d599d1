from __future__ import annotations

import copy
import json
import logging
import secrets
import string
import threading
from pathlib import Path
from typing import Any, Callable

from . import codec
from .errors import ConflictError, InvalidDocumentError, InvalidKeyError, NotFoundError
from .interfaces import KeyValueStore, KVEntry

logger = logging.getLogger(__name__)

KEY_ALPHABET = string.ascii_letters + string.digits
DEFAULT_KEY_LENGTH = 8
DEFAULT_LIST_LIMIT = 1000

# Characters that would break the one-record-per-line file format.
_FORBIDDEN_KEY_CHARS = (codec.DELIMITER, "\n", "\r")


def random_key(length: int = DEFAULT_KEY_LENGTH) -> str:
    return "".join(secrets.choice(KEY_ALPHABET) for _ in range(length))


def _check_key(key: str) -> str:
    if not isinstance(key, str) or not key:
        raise InvalidKeyError("Key must be a non-empty string")
    if any(ch in key for ch in _FORBIDDEN_KEY_CHARS):
        raise InvalidKeyError(f"Key may not contain '|' or line breaks: {key!r}")
    return key


def _to_document(value: Any) -> Any:
    """
    Return a private copy of `value` in its stored JSON form (tuples become
    lists, and so on).
    """
    try:
        return json.loads(codec.json_text(value))
    except (TypeError, ValueError) as e:
        raise InvalidDocumentError(f"Value is not a JSON document: {e}") from e


class KVStore(KeyValueStore):
    """
    In-memory map of key -> JSON document, persisted as a full snapshot
    after every mutation.

    Every check-then-act runs under one lock. The snapshot for a persist is
    taken under the lock too, but the file write happens after it is
    released, so two racing mutations may hit the disk in either order.
    """

    def __init__(
        self,
        path: Path,
        *,
        key_length: int = DEFAULT_KEY_LENGTH,
        key_factory: Callable[[], str] | None = None,
    ) -> None:
        self._path = Path(path)
        self._key_length = key_length
        self._key_factory = key_factory or (lambda: random_key(self._key_length))
        self._lock = threading.Lock()
        self._data: dict[str, Any] = {}

        loaded = codec.read_snapshot(self._path)
        with self._lock:
            self._data.update(loaded)
            count = len(self._data)
        logger.info("Loaded %d keys from disk", count)

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def _persist(self) -> None:
        with self._lock:
            text = codec.encode(self._data)
        logger.info("Writing data to disk")
        codec.write_snapshot(self._path, text)

    def create(self, value: Any) -> str:
        doc = _to_document(value)
        key = self._key_factory()
        with self._lock:
            while key in self._data:
                key = self._key_factory()
            self._data[key] = doc

        self._persist()
        logger.info("Created key: %s", key)
        return key

    def create_with_key(self, key: str, value: Any) -> str:
        _check_key(key)
        doc = _to_document(value)
        with self._lock:
            if key in self._data:
                logger.warning("Create error - key already exists: %s", key)
                raise ConflictError(key)
            self._data[key] = doc

        self._persist()
        logger.info("Created key: %s", key)
        return key

    def upsert(self, key: str, value: Any) -> None:
        _check_key(key)
        doc = _to_document(value)
        with self._lock:
            self._data[key] = doc

        self._persist()
        logger.info("Patched key: %s", key)

    def get(self, key: str) -> Any:
        with self._lock:
            if key not in self._data:
                logger.warning("Key not found: %s", key)
                raise NotFoundError(key)
            value = copy.deepcopy(self._data[key])
        logger.info("Grabbing key: %s", key)
        return value

    def delete(self, key: str) -> None:
        with self._lock:
            if key not in self._data:
                logger.warning("Delete error - key not found: %s", key)
                raise NotFoundError(key)
            del self._data[key]

        self._persist()
        logger.info("Deleted key: %s", key)

    def list(self, skip: int = 0, limit: int = DEFAULT_LIST_LIMIT) -> list[KVEntry]:
        if skip < 0 or limit < 0:
            raise ValueError("skip and limit must be non-negative")

        with self._lock:
            window = sorted(self._data)[skip : skip + limit]
            entries = [KVEntry(key=k, data=copy.deepcopy(self._data[k])) for k in window]

        if not entries:
            logger.info("No documents found")
            raise NotFoundError()

        logger.info("Returning %d keys after skipping %d", len(entries), skip)
        return entries
