"""Mini README: Centralised configuration for PocketLedger.

Structure:
    * PocketLedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Every value can be overridden with a ``POCKETLEDGER_`` environment
    variable or a local ``.env`` file, e.g. ``POCKETLEDGER_STORAGE_BACKEND=memory``
    to run without touching disk. Settings are cached for the process;
    tests call ``get_settings.cache_clear()`` after patching the environment.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class PocketLedgerSettings(BaseSettings):
    """Runtime configuration for the ledger, its storage and interfaces."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the file-backed key-value store.",
    )
    storage_backend: str = Field(
        "file",
        description="Identifier of the key-value backend (``file`` or ``memory``).",
    )
    storage_key: str = Field(
        "transactions",
        description="Fixed key under which the serialised ledger is stored.",
    )
    date_format: str = Field(
        "%x",
        description="strftime pattern for transaction dates; ``%x`` is the locale date.",
    )
    currency_symbol: str = Field("$", description="Symbol prefixed to displayed amounts.")
    log_level: str = Field("INFO", description="Root logging level name.")
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web dashboard to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web dashboard exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "POCKETLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @validator("storage_backend", pre=True)
    def _normalise_backend(cls, value: str) -> str:
        """Backend identifiers are matched case-insensitively."""

        return str(value).strip().lower()


@lru_cache()
def get_settings() -> PocketLedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return PocketLedgerSettings()
