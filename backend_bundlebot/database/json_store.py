"""
Whole-document JSON key-value store.

One store = one JSON object on disk mapping string keys to arbitrary JSON
values. Read-through once at construction, write-through on every mutation.
Writes go to a temp file in the same directory and are moved into place with
os.replace, so a crash mid-write leaves the previous document intact.

Not safe for multiple processes writing the same file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterator

from backend_bundlebot.bundlebot_logging import get_logger
from backend_bundlebot.core.exceptions import PersistenceError

logger = get_logger(__name__)


def _atomic_write_json(path: Path, obj: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=path.name + ".", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(obj, ensure_ascii=False, indent=2))
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.unlink(tmp)


class JsonStore:
    """In-memory dict mirrored to a JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("json_store_load_failed", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.error("json_store_load_failed", path=str(self.path), error="top-level value is not an object")
            return {}
        logger.info("json_store_loaded", path=str(self.path), keys=len(data))
        return data

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def keys(self) -> list[str]:
        return list(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store value under key and persist. A failed save is logged, memory keeps the value."""
        self._data[key] = value
        try:
            self.save()
        except PersistenceError as e:
            logger.error("json_store_save_failed", path=str(self.path), key=key, error=str(e))

    def save(self) -> None:
        """Write the whole table to disk. Raises PersistenceError on failure."""
        try:
            _atomic_write_json(self.path, self._data)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to save {self.path}: {e}") from e
