"""Mini README: Abstract key-value store used to persist the ledger.

Structure:
    * KeyValueStore - interface implemented by storage backends.

A backend only needs to map string keys to string values. The ledger is
written as one serialised blob under a single key, so ``set`` must replace
the whole value in one step from the caller's point of view.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class KeyValueStore(ABC):
    """Base interface for durable string key-value storage."""

    backend_name: str = "generic"
    persistent: bool = True

    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = directory
        LOGGER.debug("Initialising %s store at '%s'", self.backend_name, directory)

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or ``None`` when nothing is stored."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for UI displays."""

        return {
            "backend": self.backend_name,
            "location": str(self.directory) if self.directory else "in-process",
        }
