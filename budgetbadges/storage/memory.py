"""Mini README: In-memory storage backend.

Keeps JSON-compatible values in a dictionary. Values are deep-copied on the
way in and out so callers cannot mutate persisted state by accident. Useful
for tests and for throwaway sessions where nothing should touch the disk.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Optional

from .base import KeyValueStorage
from .registry import REGISTRY


class InMemoryStorage(KeyValueStorage):
    """Dictionary-backed storage that lives as long as the process."""

    backend_name = "memory"

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def read(self, key: str) -> Optional[Any]:
        if key not in self._values:
            return None
        return copy.deepcopy(self._values[key])

    def write_many(self, values: Dict[str, Any]) -> None:
        for key, value in values.items():
            self._values[key] = copy.deepcopy(value)

    def clear(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._values.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._values)


REGISTRY.register(InMemoryStorage)
