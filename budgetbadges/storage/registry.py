"""Mini README: Registry mapping storage backend identifiers to classes.

Structure:
    * StorageBackendRegistry - registration and instantiation of
      ``KeyValueStorage`` implementations.

Backends register themselves on import, and the application root resolves
the backend named in the settings through ``REGISTRY.create``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Optional, Type

from .base import KeyValueStorage
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class StorageBackendRegistry:
    """Simple registry for mapping backend identifiers to classes."""

    def __init__(self) -> None:
        self._backends: Dict[str, Type[KeyValueStorage]] = {}

    def register(self, backend: Type[KeyValueStorage]) -> None:
        """Register a new backend class with the registry."""

        identifier = backend.backend_name.lower()
        LOGGER.debug("Registering storage backend '%s'", identifier)
        self._backends[identifier] = backend

    def available_backends(self) -> Iterable[str]:
        return sorted(self._backends.keys())

    def create(self, identifier: str, *, directory: Optional[Path] = None) -> KeyValueStorage:
        """Instantiate the backend matching ``identifier``."""

        backend_cls = self._backends.get(identifier.lower())
        if not backend_cls:
            raise KeyError(f"Unknown storage backend '{identifier}'")
        LOGGER.info("Creating storage backend '%s'", identifier)
        if directory is not None and backend_cls.accepts_directory:
            return backend_cls(directory=directory)
        return backend_cls()


REGISTRY = StorageBackendRegistry()
