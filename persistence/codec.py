from __future__ import annotations

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from .errors import CorruptDataError, StorageIOError
from .locks import FILE_WRITE_LOCKS
from .paths import ensure_dir

logger = logging.getLogger(__name__)

DELIMITER = "|"
ESCAPED_DELIMITER = "\\|"


def json_text(value: Any) -> str:
    """
    Compact, strict JSON. Raises TypeError / ValueError for values that are
    not JSON documents.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def encode_value(value: Any) -> str:
    """Base64 of the JSON text, so the payload never holds a newline or the delimiter."""
    encoded = base64.b64encode(json_text(value).encode("utf-8")).decode("ascii")
    # base64 has no '|'; the escape is kept so files stay byte-compatible.
    return encoded.replace(DELIMITER, ESCAPED_DELIMITER)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_value(raw: str) -> Any:
    # Legacy files wrapped the payload in one pair of double quotes.
    if len(raw) >= 2 and raw.startswith('"') and raw.endswith('"'):
        raw = raw[1:-1]
    payload = base64.b64decode(raw, validate=True)
    return json.loads(payload.decode("utf-8"), parse_constant=_reject_constant)


def encode(entries: Mapping[str, Any]) -> str:
    """Serialize the whole map, one `key|payload` line per entry in key order."""
    lines = [f"{key}{DELIMITER}{encode_value(entries[key])}\n" for key in sorted(entries)]
    return "".join(lines)


def decode(text: str) -> dict[str, Any]:
    """
    Parse a snapshot back into a map.

    All-or-nothing: the first undecodable line raises CorruptDataError and no
    partial map is returned. Lines with an empty key or payload are skipped,
    and a key repeated later in the file overwrites the earlier one.
    """
    result: dict[str, Any] = {}
    for line_no, line in enumerate(text.split("\n"), start=1):
        line = line.removesuffix("\r")
        if not line:
            continue
        key, _, raw = line.partition(DELIMITER)
        if not key or not raw:
            continue
        try:
            result[key] = decode_value(raw)
        except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as e:
            raise CorruptDataError(line_no, str(e)) from e
    return result


def read_snapshot(path: Path) -> dict[str, Any]:
    """
    Load the map stored at `path`, creating an empty file if there is none.
    """
    try:
        if not path.exists():
            ensure_dir(path.parent)
            path.touch()
            logger.info("Created empty data file %s", path)
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageIOError(path, str(e)) from e
    return decode(text)


def write_snapshot(path: Path, text: str) -> None:
    """
    Replace the file at `path` with `text` (write temp file, then rename).
    """
    with FILE_WRITE_LOCKS.writing(path):
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            ensure_dir(path.parent)
            with tmp_path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(text)
            tmp_path.replace(path)
        except OSError as e:
            raise StorageIOError(path, str(e)) from e
