"""Mini README: Persistence adapter between the ledger and a key-value store.

Structure:
    * TransactionPersistence - load/save the whole ledger as one JSON array.
    * create_ledger_store - build the configured store, adapter and ledger.

The ledger is stored as a single JSON array under a fixed key, each entry
shaped like ``Transaction.as_dict``. There is no schema version. Loading is
forgiving: a missing value or an unparseable blob yields an empty ledger and
individual malformed entries are skipped, each with a warning, so bad data
never stops the tracker from starting. Saving always rewrites the whole
array in one ``set`` call.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Optional, Set

from .base import KeyValueStore
from .registry import REGISTRY
from ..configuration import PocketLedgerSettings, get_settings
from ..finance.ledger import LedgerStore
from ..finance.transactions import Transaction
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "transactions"


class TransactionPersistence:
    """Serialise the ledger to and from a key-value store."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> List[Transaction]:
        """Return stored transactions in order, or an empty list when unusable."""

        raw = self.store.get(self.key)
        if raw is None:
            LOGGER.debug("No stored ledger under key '%s'", self.key)
            return []
        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError) as error:
            LOGGER.warning("Stored ledger under '%s' is not valid JSON: %s", self.key, error)
            return []
        if not isinstance(payload, list):
            LOGGER.warning(
                "Stored ledger under '%s' is a %s, expected a list",
                self.key,
                type(payload).__name__,
            )
            return []

        transactions: List[Transaction] = []
        seen_ids: Set[int] = set()
        for index, entry in enumerate(payload):
            try:
                transaction = Transaction.from_dict(entry)
            except ValueError as error:
                LOGGER.warning("Skipping stored entry %s: %s", index, error)
                continue
            if transaction.transaction_id in seen_ids:
                LOGGER.warning(
                    "Skipping stored entry %s: duplicate id %s", index, transaction.transaction_id
                )
                continue
            seen_ids.add(transaction.transaction_id)
            transactions.append(transaction)
        LOGGER.debug("Loaded %s of %s stored entries", len(transactions), len(payload))
        return transactions

    def save(self, transactions: Iterable[Transaction]) -> None:
        """Overwrite the stored ledger with the complete collection."""

        entries = [transaction.as_dict() for transaction in transactions]
        self.store.set(self.key, json.dumps(entries))
        LOGGER.debug("Saved %s transactions under key '%s'", len(entries), self.key)


def create_ledger_store(settings: Optional[PocketLedgerSettings] = None) -> LedgerStore:
    """Construct the session ledger from configuration."""

    settings = settings or get_settings()
    store = REGISTRY.create(settings.storage_backend, directory=settings.data_directory)
    persistence = TransactionPersistence(store, key=settings.storage_key)
    LOGGER.info("Opening ledger with %s", store.metadata())
    return LedgerStore(persistence, date_format=settings.date_format)
