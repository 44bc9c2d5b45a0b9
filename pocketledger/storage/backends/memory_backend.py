"""Mini README: In-process key-value store.

Structure:
    * MemoryKeyValueStore - dictionary-backed store for tests and demos.

Values live only as long as the process. Selecting ``memory`` in the
settings runs the tracker without touching disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from ..base import KeyValueStore
from ..registry import REGISTRY


class MemoryKeyValueStore(KeyValueStore):
    """Keep values in a plain dictionary."""

    backend_name = "memory"
    persistent = False

    def __init__(self, directory: Optional[Path] = None) -> None:
        super().__init__(directory=None)
        self._values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


REGISTRY.register(MemoryKeyValueStore)
