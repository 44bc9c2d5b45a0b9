"""Mini README: Tests covering the ledger store mutations and persistence contract.

Structure:
    * add/remove behaviour - fields, ids, ordering and no-op removal.
    * persistence - one save per mutation, reload order, failed saves.
    * subscriptions - listeners see the post-save snapshot.
"""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest

from pocketledger.configuration import get_settings
from pocketledger.finance import Category, LedgerStore, TransactionType
from pocketledger.storage import TransactionPersistence, create_ledger_store
from pocketledger.storage.backends import MemoryKeyValueStore


def _ledger(store, clock) -> LedgerStore:
    return LedgerStore(TransactionPersistence(store), clock=clock, date_format="%Y-%m-%d")


def test_add_records_supplied_fields(recording_store, fixed_clock) -> None:
    """A new transaction carries the caller's values plus id and date."""

    ledger = _ledger(recording_store, fixed_clock)

    created = ledger.add("Groceries", 42.5, TransactionType.EXPENSE, Category.FOOD)

    assert ledger.all() == [created]
    assert created.description == "Groceries"
    assert created.amount == pytest.approx(42.5)
    assert created.transaction_type is TransactionType.EXPENSE
    assert created.category is Category.FOOD
    assert created.date == "2024-05-01"
    assert created.transaction_id == int(fixed_clock().timestamp() * 1000)


def test_ids_stay_unique_when_the_clock_does_not_move(recording_store, fixed_clock) -> None:
    """Several adds within the same millisecond still get distinct, increasing ids."""

    ledger = _ledger(recording_store, fixed_clock)

    ids = [
        ledger.add(f"Entry {index}", 1.0, TransactionType.INCOME, Category.OTHER).transaction_id
        for index in range(5)
    ]

    assert len(set(ids)) == 5
    assert ids == sorted(ids)


def test_ids_continue_after_reload_when_clock_runs_behind(recording_store) -> None:
    """A restarted ledger never reissues an id that is already stored."""

    first = _ledger(recording_store, lambda: datetime(2030, 1, 1))
    stored = first.add("Future", 10.0, TransactionType.INCOME, Category.OTHER)

    reopened = _ledger(recording_store, lambda: datetime(2020, 1, 1))
    created = reopened.add("Past", 5.0, TransactionType.EXPENSE, Category.FOOD)

    assert created.transaction_id == stored.transaction_id + 1


def test_insertion_order_is_preserved(recording_store, fixed_clock) -> None:
    ledger = _ledger(recording_store, fixed_clock)
    ledger.add("First", 1.0, TransactionType.EXPENSE, Category.FOOD)
    ledger.add("Second", 2.0, TransactionType.INCOME, Category.OTHER)
    ledger.add("Third", 3.0, TransactionType.EXPENSE, Category.SHOPPING)

    assert [item.description for item in ledger.all()] == ["First", "Second", "Third"]


def test_each_mutation_saves_exactly_once(recording_store, fixed_clock) -> None:
    """Adds, removals and no-op removals all write the full collection once."""

    ledger = _ledger(recording_store, fixed_clock)
    created = ledger.add("Bus", 2.5, TransactionType.EXPENSE, Category.TRANSPORT)
    assert len(recording_store.writes) == 1

    ledger.remove(created.transaction_id)
    assert len(recording_store.writes) == 2

    ledger.remove(123)
    assert len(recording_store.writes) == 3
    assert json.loads(recording_store.writes[-1]) == []


def test_remove_drops_matching_transaction(recording_store, fixed_clock) -> None:
    ledger = _ledger(recording_store, fixed_clock)
    keep = ledger.add("Salary", 100.0, TransactionType.INCOME, Category.OTHER)
    drop = ledger.add("Cinema", 12.0, TransactionType.EXPENSE, Category.ENTERTAINMENT)

    assert ledger.remove(drop.transaction_id) is True
    assert ledger.all() == [keep]
    assert all(item.transaction_id != drop.transaction_id for item in ledger.all())


def test_remove_unknown_id_leaves_ledger_unchanged(recording_store, fixed_clock) -> None:
    """Removing an id that does not exist is a no-op, not an error."""

    ledger = _ledger(recording_store, fixed_clock)
    ledger.add("Salary", 100.0, TransactionType.INCOME, Category.OTHER)
    before = ledger.all()

    assert ledger.remove(999) is False
    assert ledger.all() == before


def test_all_returns_stable_independent_snapshots(recording_store, fixed_clock) -> None:
    """Reading twice without mutation is idempotent and callers cannot alter state."""

    ledger = _ledger(recording_store, fixed_clock)
    ledger.add("Power bill", 80.0, TransactionType.EXPENSE, Category.UTILITIES)

    first = ledger.all()
    second = ledger.all()
    first.clear()

    assert second == ledger.all()
    assert len(ledger) == 1


def test_reopened_ledger_loads_persisted_transactions(recording_store, fixed_clock) -> None:
    ledger = _ledger(recording_store, fixed_clock)
    ledger.add("Salary", 100.0, TransactionType.INCOME, Category.OTHER)
    ledger.add("Lunch", 9.5, TransactionType.EXPENSE, Category.FOOD)

    reopened = _ledger(recording_store, fixed_clock)

    assert reopened.all() == ledger.all()


def test_failed_save_leaves_ledger_unchanged(fixed_clock) -> None:
    """A storage error propagates and the in-memory ledger keeps its last saved state."""

    class BrokenStore(MemoryKeyValueStore):
        def set(self, key: str, value: str) -> None:
            raise OSError("disk full")

    ledger = _ledger(BrokenStore(), fixed_clock)

    with pytest.raises(OSError):
        ledger.add("Lunch", 9.5, TransactionType.EXPENSE, Category.FOOD)
    assert ledger.all() == []


def test_subscribers_receive_snapshot_after_each_mutation(recording_store, fixed_clock) -> None:
    ledger = _ledger(recording_store, fixed_clock)
    seen = []
    unsubscribe = ledger.subscribe(lambda snapshot: seen.append((len(recording_store.writes), snapshot)))

    created = ledger.add("Taxi", 15.0, TransactionType.EXPENSE, Category.TRANSPORT)
    ledger.remove(created.transaction_id)
    unsubscribe()
    ledger.add("Ignored", 1.0, TransactionType.EXPENSE, Category.OTHER)

    assert [writes for writes, _ in seen] == [1, 2]
    assert seen[0][1] == [created]
    assert seen[1][1] == []


def test_create_ledger_store_uses_configured_backend(isolated_settings, monkeypatch) -> None:
    """The factory honours backend, key and date format settings."""

    ledger = create_ledger_store(isolated_settings)
    created = ledger.add("Rent", 500.0, TransactionType.EXPENSE, Category.UTILITIES)

    stored = isolated_settings.data_directory / "transactions.json"
    assert json.loads(stored.read_text(encoding="utf-8"))[0]["id"] == created.transaction_id

    monkeypatch.setenv("POCKETLEDGER_STORAGE_BACKEND", "memory")
    get_settings.cache_clear()
    in_memory = create_ledger_store(get_settings())
    assert in_memory.all() == []


def test_concurrent_adds_get_unique_ids_and_one_save_each(recording_store, fixed_clock) -> None:
    """Adds from several threads neither collide nor lose entries."""

    ledger = _ledger(recording_store, fixed_clock)
    seen_sizes = []
    ledger.subscribe(lambda snapshot: seen_sizes.append(len(snapshot)))

    def add_batch(worker: int) -> None:
        for index in range(25):
            ledger.add(f"Item {worker}-{index}", 1.0, TransactionType.EXPENSE, Category.OTHER)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(add_batch, range(8)))

    stored = ledger.all()
    ids = [item.transaction_id for item in stored]
    assert len(stored) == 200
    assert len(set(ids)) == 200
    assert ids == sorted(ids)
    assert len(recording_store.writes) == 200
    assert len(json.loads(recording_store.writes[-1])) == 200
    assert seen_sizes == list(range(1, 201))
