"""Mini README: Local key-value storage for the ledger collections.

Re-exports the storage abstractions and the built-in backends. ``base``
defines the interface and the flushing session, ``registry`` maps backend
names from the settings to classes, and ``json_file`` / ``memory`` are the
concrete backends that register themselves on import.
"""

from .base import KeyValueStorage, StorageError, StorageSession
from .registry import REGISTRY, StorageBackendRegistry
from .json_file import JsonFileStorage
from .memory import InMemoryStorage

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "REGISTRY",
    "StorageBackendRegistry",
    "StorageError",
    "StorageSession",
]
