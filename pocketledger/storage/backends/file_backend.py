"""Mini README: File-backed key-value store.

Structure:
    * FileKeyValueStore - stores each key as ``<key>.json`` in a directory.

Writes land in a temporary file next to the target and are moved into
place with ``os.replace``; a reader sees either the previous blob or the
new one, never a truncated file. Unreadable files are reported as missing
so a damaged store degrades to an empty ledger.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

from ..base import KeyValueStore
from ..registry import REGISTRY
from ...configuration import get_settings
from ...logging_utils import get_logger

LOGGER = get_logger(__name__)


class FileKeyValueStore(KeyValueStore):
    """Persist values as UTF-8 files inside a single directory."""

    backend_name = "file"

    def __init__(self, directory: Optional[Path] = None) -> None:
        directory = Path(directory) if directory else get_settings().data_directory
        directory.mkdir(parents=True, exist_ok=True)
        super().__init__(directory=directory)

    def path_for(self, key: str) -> Path:
        """Return the file path used for ``key``."""

        if not key or os.sep in key or (os.altsep and os.altsep in key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            LOGGER.debug("No stored value for key '%s' at %s", key, path)
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            LOGGER.warning("Unable to read %s, treating as missing: %s", path, error)
            return None

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        descriptor, temp_name = tempfile.mkstemp(
            prefix=f".{key}.", suffix=".tmp", dir=str(self.directory)
        )
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
        LOGGER.debug("Wrote %s characters to %s", len(value), path)


REGISTRY.register(FileKeyValueStore)
