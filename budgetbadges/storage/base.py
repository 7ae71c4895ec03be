"""Mini README: Abstract key-value storage used to persist the ledger.

Structure:
    * StorageError - raised when a backend cannot write its data.
    * StorageSession - write handle buffering values until it is flushed.
    * KeyValueStorage - abstract interface implemented by concrete backends.

The ledger keeps three JSON-compatible collections under fixed keys. Backends
only need to read a raw value for a key, write a batch of values and remove
a given set of keys. ``session`` wraps those primitives so callers acquire a
handle in a ``with`` block and every exit path flushes pending writes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class StorageError(RuntimeError):
    """Raised when persisted data cannot be written."""


class StorageSession:
    """Buffered write handle returned by ``KeyValueStorage.session``."""

    def __init__(self, storage: "KeyValueStorage") -> None:
        self._storage = storage
        self._pending: Dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the pending value for ``key`` or fall back to the backend."""

        if key in self._pending:
            return self._pending[key]
        return self._storage.read(key)

    def set(self, key: str, value: Any) -> None:
        self._pending[key] = value

    def flush(self) -> None:
        """Write buffered values through to the backend."""

        if not self._pending:
            return
        pending, self._pending = self._pending, {}
        LOGGER.debug(
            "Flushing %s key(s) to %s: %s",
            len(pending),
            self._storage.backend_name,
            ", ".join(sorted(pending)),
        )
        self._storage.write_many(pending)


class KeyValueStorage(ABC):
    """Base interface for local key-value persistence."""

    backend_name: str = "generic"
    accepts_directory: bool = False

    @abstractmethod
    def read(self, key: str) -> Optional[Any]:
        """Return the decoded value stored under ``key`` or ``None``.

        Implementations return ``None`` for absent keys and for data that can
        no longer be decoded; they never raise for read failures.
        """

    @abstractmethod
    def write_many(self, values: Dict[str, Any]) -> None:
        """Persist every key/value pair, replacing existing values."""

    @abstractmethod
    def clear(self, keys: Iterable[str]) -> None:
        """Remove the given keys; keys that were never written are ignored."""

    def write(self, key: str, value: Any) -> None:
        self.write_many({key: value})

    @contextmanager
    def session(self) -> Iterator[StorageSession]:
        """Yield a buffered write handle and flush it on every exit path."""

        handle = StorageSession(self)
        try:
            yield handle
        finally:
            handle.flush()

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for settings screens."""

        return {"backend": self.backend_name}
