"""Mini README: JSON-file storage backend.

Structure:
    * JsonFileStorage - keeps each key in its own ``<key>.json`` file.

Each collection is serialised independently so a damaged file only resets
its own collection. Writes go to a temporary file in the same directory and
are moved into place with ``os.replace`` so a crash never leaves a partially
written file behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .base import KeyValueStorage, StorageError
from .registry import REGISTRY
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class JsonFileStorage(KeyValueStorage):
    """Persist ledger collections as JSON documents inside a directory."""

    backend_name = "json"
    accepts_directory = True

    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = Path(directory or "data").expanduser()
        self.directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("JSON storage rooted at %s", self.directory)

    def path_for(self, key: str) -> Path:
        """Return the file path backing ``key``."""

        if not key or any(separator in key for separator in ("/", "\\", "..")):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[Any]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            LOGGER.warning("Ignoring unreadable storage file %s: %s", path, error)
            return None

    def write_many(self, values: Dict[str, Any]) -> None:
        for key, value in values.items():
            self._write_atomic(self.path_for(key), value)

    def _write_atomic(self, path: Path, value: Any) -> None:
        """Serialise ``value`` next to ``path`` and move it into place."""

        descriptor, temp_name = tempfile.mkstemp(
            prefix=f".{path.stem}-", suffix=".tmp", dir=str(self.directory)
        )
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                json.dump(value, handle, indent=2, ensure_ascii=False)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, path)
        except (OSError, TypeError, ValueError) as error:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise StorageError(f"Could not write {path}: {error}") from error

    def clear(self, keys: Iterable[str]) -> None:
        for key in keys:
            path = self.path_for(key)
            if path.exists():
                path.unlink()
                LOGGER.debug("Removed %s", path)

    def metadata(self) -> Dict[str, str]:
        return {"backend": self.backend_name, "directory": str(self.directory)}


REGISTRY.register(JsonFileStorage)
