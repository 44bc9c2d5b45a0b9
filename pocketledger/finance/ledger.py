"""Mini README: Authoritative in-memory ledger backed by persistent storage.

Structure:
    * LedgerPersistence - protocol the store needs from its persistence adapter.
    * LedgerStore - owns the ordered transaction list and its mutations.

The store is constructed once per session from whatever the persistence
adapter loads. Every mutation appends or removes a record, saves the full
collection exactly once, and then notifies subscribers with a fresh
snapshot so views can recompute their derived data. Notification happens
under the store lock, so listeners see snapshots in mutation order. Records are never
edited in place; inputs are assumed to be validated at the boundary (see
``finance.validation``).
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Iterable, List, Protocol

from .transactions import Category, Transaction, TransactionType
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

LedgerListener = Callable[[List[Transaction]], None]


class LedgerPersistence(Protocol):
    """Load and save the complete transaction collection."""

    def load(self) -> List[Transaction]:
        ...

    def save(self, transactions: Iterable[Transaction]) -> None:
        ...


class LedgerStore:
    """Manage the ordered ledger and persist after every mutation."""

    def __init__(
        self,
        persistence: LedgerPersistence,
        *,
        clock: Callable[[], datetime] = datetime.now,
        date_format: str = "%x",
    ) -> None:
        self._persistence = persistence
        self._clock = clock
        self._date_format = date_format
        self._lock = threading.RLock()
        self._listeners: List[LedgerListener] = []
        self._transactions: List[Transaction] = list(persistence.load())
        self._last_id = max(
            (transaction.transaction_id for transaction in self._transactions), default=0
        )
        LOGGER.debug("Ledger initialised with %s transactions", len(self._transactions))

    def __len__(self) -> int:
        return len(self._transactions)

    def _next_id(self, moment: datetime) -> int:
        """Return a time-derived id that is strictly greater than the last one."""

        candidate = int(moment.timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def add(
        self,
        description: str,
        amount: float,
        transaction_type: TransactionType,
        category: Category,
    ) -> Transaction:
        """Append a new transaction, persist the ledger and return the record."""

        with self._lock:
            moment = self._clock()
            transaction = Transaction(
                transaction_id=self._next_id(moment),
                description=description,
                amount=amount,
                transaction_type=transaction_type,
                category=category,
                date=moment.strftime(self._date_format),
            )
            updated = [*self._transactions, transaction]
            self._persistence.save(updated)
            self._transactions = updated
            self._notify(list(updated))
        LOGGER.info(
            "Recorded %s %s of %.2f in %s",
            transaction.transaction_type.value,
            transaction.transaction_id,
            transaction.amount,
            transaction.category.value,
        )
        return transaction

    def remove(self, transaction_id: int) -> bool:
        """Drop the matching transaction if present; unknown ids are a no-op."""

        with self._lock:
            remaining = [
                transaction
                for transaction in self._transactions
                if transaction.transaction_id != transaction_id
            ]
            removed = len(remaining) != len(self._transactions)
            self._persistence.save(remaining)
            self._transactions = remaining
            self._notify(list(remaining))
        if removed:
            LOGGER.info("Removed transaction %s", transaction_id)
        else:
            LOGGER.debug("Remove requested for unknown transaction %s", transaction_id)
        return removed

    def all(self) -> List[Transaction]:
        """Return a snapshot of the ledger in insertion order."""

        with self._lock:
            return list(self._transactions)

    def subscribe(self, listener: LedgerListener) -> Callable[[], None]:
        """Call ``listener`` with a new snapshot after each persisted mutation."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, snapshot: List[Transaction]) -> None:
        for listener in list(self._listeners):
            listener(list(snapshot))
