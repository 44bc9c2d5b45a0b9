"""Mini README: Concrete key-value storage backends.

Importing this package registers the built-in backends with
``storage.registry.REGISTRY``. New backends should subclass
``KeyValueStore`` and call ``REGISTRY.register`` at import time.
"""

from .file_backend import FileKeyValueStore
from .memory_backend import MemoryKeyValueStore

__all__ = ["FileKeyValueStore", "MemoryKeyValueStore"]
