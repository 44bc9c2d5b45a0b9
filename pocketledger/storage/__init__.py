"""Mini README: Storage subsystem package initialiser.

``base`` defines the key-value interface, ``registry`` maps backend names
to classes, ``backends`` holds the concrete stores, and ``persistence``
adapts a store into the ledger's load/save contract.
"""

from .base import KeyValueStore
from .registry import REGISTRY, StorageBackendRegistry
from . import backends  # noqa: F401  # ensure built-in backends register on import
from .persistence import TransactionPersistence, create_ledger_store

__all__ = [
    "KeyValueStore",
    "REGISTRY",
    "StorageBackendRegistry",
    "TransactionPersistence",
    "create_ledger_store",
]
