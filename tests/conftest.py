"""Mini README: Shared fixtures for the PocketLedger test-suite.

Structure:
    * isolated_settings - autouse; points configuration at a temp directory.
    * RecordingStore / recording_store - memory store counting writes.
    * fixed_clock - clock that always returns the same moment.
    * make_transaction - factory fixture for hand-built ledger records.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

import pytest

from pocketledger.configuration import get_settings
from pocketledger.finance import Category, Transaction, TransactionType
from pocketledger.storage.backends import MemoryKeyValueStore

FIXED_MOMENT = datetime(2024, 5, 1, 12, 30, 0)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real data directory and ``.env`` file."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("POCKETLEDGER_DATA_DIRECTORY", str(tmp_path / "data"))
    monkeypatch.setenv("POCKETLEDGER_STORAGE_BACKEND", "file")
    monkeypatch.setenv("POCKETLEDGER_DATE_FORMAT", "%Y-%m-%d")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


class RecordingStore(MemoryKeyValueStore):
    """Memory store that remembers every write."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: List[str] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append(value)
        super().set(key, value)


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_MOMENT


def _build_transaction(
    transaction_id: int,
    amount: float,
    transaction_type: TransactionType = TransactionType.EXPENSE,
    category: Category = Category.OTHER,
    description: str = "Entry",
) -> Transaction:
    return Transaction(
        transaction_id=transaction_id,
        description=description,
        amount=amount,
        transaction_type=transaction_type,
        category=category,
        date="2024-05-01",
    )


@pytest.fixture
def make_transaction():
    return _build_transaction
