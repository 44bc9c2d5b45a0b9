"""Mini README: Registry of key-value storage backends.

Structure:
    * StorageBackendRegistry - maps identifiers to ``KeyValueStore`` classes.
    * REGISTRY - process-wide instance populated by ``storage.backends``.

Settings refer to a backend by identifier (``file``, ``memory``) and the
registry turns that into an instance. Identifiers are unique: a second
class claiming a taken identifier is refused, so a plugin cannot silently
redirect where the ledger is written. ``describe_backends`` feeds the
``backends`` CLI command and the startup log, and flags backends that do
not survive a restart.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Type

from .base import KeyValueStore
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class StorageBackendRegistry:
    """Map backend identifiers to ``KeyValueStore`` subclasses."""

    def __init__(self) -> None:
        self._backends: Dict[str, Type[KeyValueStore]] = {}

    def register(self, backend: Type[KeyValueStore]) -> None:
        """Register a backend class under its ``backend_name``."""

        if not (isinstance(backend, type) and issubclass(backend, KeyValueStore)):
            raise TypeError(f"{backend!r} is not a KeyValueStore subclass")
        identifier = backend.backend_name.strip().lower()
        existing = self._backends.get(identifier)
        if existing is not None and existing is not backend:
            raise ValueError(
                f"Storage backend '{identifier}' is already provided by {existing.__name__}"
            )
        LOGGER.debug("Registering storage backend '%s'", identifier)
        self._backends[identifier] = backend

    def available_backends(self) -> Iterable[str]:
        """Return backend identifiers in alphabetical order."""

        return sorted(self._backends.keys())

    def describe_backends(self) -> List[Dict[str, object]]:
        """Summarise each backend without instantiating it."""

        descriptions: List[Dict[str, object]] = []
        for identifier in self.available_backends():
            backend = self._backends[identifier]
            doc = (backend.__doc__ or "").strip()
            descriptions.append(
                {
                    "backend": identifier,
                    "summary": doc.splitlines()[0] if doc else "",
                    "persistent": backend.persistent,
                }
            )
        return descriptions

    def create(self, identifier: str, *, directory: Optional[Path] = None) -> KeyValueStore:
        """Instantiate the backend matching the identifier."""

        key = identifier.strip().lower()
        backend_cls = self._backends.get(key)
        if backend_cls is None:
            raise KeyError(
                f"Unknown storage backend '{identifier}'; "
                f"choose one of: {', '.join(self.available_backends())}"
            )
        if not backend_cls.persistent:
            LOGGER.warning("Storage backend '%s' keeps data only for this process", key)
        LOGGER.info("Creating storage backend '%s'", key)
        return backend_cls(directory=directory)


REGISTRY = StorageBackendRegistry()
