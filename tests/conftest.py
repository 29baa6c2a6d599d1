from __future__ import annotations

import importlib
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect persistence paths to a temp project directory so tests never touch real ./data.
    """
    import persistence.paths as paths

    def _project_root() -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "project_root", _project_root)
    for name in ("KV_DATA_FILE", "KV_KEY_LENGTH", "KV_DEFAULT_LIST_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def data_file(sandbox_project: Path) -> Path:
    import persistence.paths as paths

    return paths.default_data_file()


@pytest.fixture
def store(data_file: Path):
    from persistence.kv_store import KVStore

    return KVStore(data_file)


@pytest.fixture
def reload_endpoints(sandbox_project: Path) -> None:
    """
    Endpoints create the store singleton at import time; reload after sandboxing paths.
    """
    import endpoints.kv_endpoints as kv_endpoints

    importlib.reload(kv_endpoints)
