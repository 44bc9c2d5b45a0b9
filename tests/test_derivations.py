"""Mini README: Tests for the pure ledger derivations.

Filters must preserve order and AND-combine, summaries must be exact, and
category aggregation must report every category including zeros.
"""

from __future__ import annotations

from decimal import Decimal

from pocketledger.finance import (
    ALL,
    Category,
    LedgerSummary,
    TransactionType,
    aggregate_by_category,
    filter_transactions,
    summarize,
)

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


def test_summarize_empty_ledger_is_all_zero() -> None:
    summary = summarize([])

    assert summary == LedgerSummary()
    assert summary.as_dict() == {"total_income": 0.0, "total_expenses": 0.0, "balance": 0.0}


def test_summarize_totals_income_and_expenses(make_transaction) -> None:
    summary = summarize(
        [make_transaction(1, 100.0, INCOME), make_transaction(2, 40.0, EXPENSE)]
    )

    assert summary.total_income == 100
    assert summary.total_expenses == 40
    assert summary.balance == 60


def test_summarize_uses_exact_decimal_sums(make_transaction) -> None:
    """Float noise such as 0.1 + 0.2 must not leak into the totals."""

    summary = summarize(
        [
            make_transaction(1, 0.1, INCOME),
            make_transaction(2, 0.2, INCOME),
            make_transaction(3, 0.3, EXPENSE),
        ]
    )

    assert summary.total_income == Decimal("0.3")
    assert summary.balance == Decimal("0")


def test_summarize_allows_negative_balance(make_transaction) -> None:
    summary = summarize([make_transaction(1, 10.0, INCOME), make_transaction(2, 25.5, EXPENSE)])

    assert summary.balance == Decimal("-15.5")


def test_filter_by_type_keeps_original_order(make_transaction) -> None:
    transactions = [
        make_transaction(1, 5.0, INCOME, description="a"),
        make_transaction(2, 6.0, EXPENSE, description="b"),
        make_transaction(3, 7.0, INCOME, description="c"),
    ]

    result = filter_transactions(transactions, "income", ALL)

    assert [item.description for item in result] == ["a", "c"]


def test_filter_all_sentinel_matches_everything(make_transaction) -> None:
    transactions = [make_transaction(1, 5.0, INCOME), make_transaction(2, 6.0, EXPENSE)]

    assert filter_transactions(transactions) == transactions
    assert filter_transactions(transactions, ALL, ALL) == transactions


def test_filters_are_and_combined(make_transaction) -> None:
    transactions = [
        make_transaction(1, 5.0, EXPENSE, Category.FOOD),
        make_transaction(2, 6.0, INCOME, Category.FOOD),
        make_transaction(3, 7.0, EXPENSE, Category.SHOPPING),
    ]

    result = filter_transactions(transactions, TransactionType.EXPENSE, Category.FOOD)

    assert [item.transaction_id for item in result] == [1]
    assert filter_transactions(transactions, INCOME, Category.SHOPPING) == []


def test_aggregate_by_category_excludes_income(make_transaction) -> None:
    totals = aggregate_by_category(
        [
            make_transaction(1, 20.0, EXPENSE, Category.FOOD),
            make_transaction(2, 5.0, EXPENSE, Category.FOOD),
            make_transaction(3, 30.0, INCOME, Category.FOOD),
        ]
    )

    assert totals[Category.FOOD] == 25
    assert all(total == 0 for category, total in totals.items() if category is not Category.FOOD)


def test_aggregate_by_category_lists_every_category_in_order() -> None:
    totals = aggregate_by_category([])

    assert list(totals) == list(Category)
    assert set(totals.values()) == {Decimal("0")}


def test_derivations_do_not_mutate_input(make_transaction) -> None:
    transactions = [make_transaction(1, 5.0, EXPENSE), make_transaction(2, 9.0, INCOME)]
    copy = list(transactions)

    filter_transactions(transactions, INCOME)
    summarize(transactions)
    aggregate_by_category(transactions)

    assert transactions == copy
