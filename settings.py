from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from persistence import paths


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Persistence
    data_file: Path

    # Store behaviour
    key_length: int
    default_list_limit: int

    # Debug
    debug_log_requests: bool


def get_settings() -> Settings:
    raw_path = os.getenv("KV_DATA_FILE", "").strip()
    data_file = Path(raw_path) if raw_path else paths.default_data_file()

    key_length = _env_int("KV_KEY_LENGTH", 8)
    if key_length <= 0:
        raise ValueError("KV_KEY_LENGTH must be positive")

    default_list_limit = _env_int("KV_DEFAULT_LIST_LIMIT", 1000)
    if default_list_limit < 0:
        raise ValueError("KV_DEFAULT_LIST_LIMIT must be non-negative")

    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", True)

    return Settings(
        data_file=data_file,
        key_length=key_length,
        default_list_limit=default_list_limit,
        debug_log_requests=debug_log_requests,
    )
