from __future__ import annotations

import contextlib
import threading
from pathlib import Path
from typing import Iterator


class FileWriteLocks:
    """
    One lock per resolved data file, so two snapshot writes to the same file
    never interleave their bytes or fight over the temp file.

    This does not order writers: whoever takes the lock last wins, whatever
    snapshot it carries.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._by_path: dict[str, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        resolved = str(path.resolve())
        with self._guard:
            return self._by_path.setdefault(resolved, threading.Lock())

    @contextlib.contextmanager
    def writing(self, path: Path) -> Iterator[None]:
        with self.lock_for(path):
            yield


FILE_WRITE_LOCKS = FileWriteLocks()
