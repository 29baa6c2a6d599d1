from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_FILENAME = "database.vbank"


def project_root() -> Path:
    # persistence/paths.py -> persistence -> project root
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    return project_root() / "data"


def default_data_file() -> Path:
    return data_dir() / DEFAULT_DATA_FILENAME


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
