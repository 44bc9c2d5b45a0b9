"""Mini README: Pure derivations over a ledger snapshot.

Structure:
    * ALL - filter sentinel matching every value.
    * LedgerSummary - income, expense and balance totals.
    * filter_transactions - AND-combined type/category filter.
    * summarize - income/expense/balance totals.
    * aggregate_by_category - expense totals for every category.

Nothing here keeps state or performs I/O; callers pass ``LedgerStore.all()``
and get plain data back. Sums are exact ``Decimal`` arithmetic over the
stored amounts, each converted through its shortest ``repr`` so that
``0.1 + 0.2`` totals ``0.3``. Rounding is left to presentation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Union

from .transactions import Category, Transaction, TransactionType

ALL = "all"

TypeFilter = Union[TransactionType, str]
CategoryFilter = Union[Category, str]

_ZERO = Decimal("0")


def _exact(amount: float) -> Decimal:
    return Decimal(repr(amount))


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    """Totals shown on the dashboard."""

    total_income: Decimal = _ZERO
    total_expenses: Decimal = _ZERO
    balance: Decimal = _ZERO

    def as_dict(self) -> Dict[str, float]:
        """Export the totals as floats for JSON responses."""

        return {
            "total_income": float(self.total_income),
            "total_expenses": float(self.total_expenses),
            "balance": float(self.balance),
        }


def filter_transactions(
    transactions: Iterable[Transaction],
    type_filter: TypeFilter = ALL,
    category_filter: CategoryFilter = ALL,
) -> List[Transaction]:
    """Return the transactions matching both filters, in their original order."""

    return [
        transaction
        for transaction in transactions
        if (type_filter == ALL or transaction.transaction_type == type_filter)
        and (category_filter == ALL or transaction.category == category_filter)
    ]


def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    """Total income and expenses and derive the balance."""

    income = _ZERO
    expenses = _ZERO
    for transaction in transactions:
        if transaction.transaction_type is TransactionType.INCOME:
            income += _exact(transaction.amount)
        else:
            expenses += _exact(transaction.amount)
    return LedgerSummary(total_income=income, total_expenses=expenses, balance=income - expenses)


def aggregate_by_category(transactions: Iterable[Transaction]) -> Dict[Category, Decimal]:
    """Sum expense amounts per category, listing every category even when zero."""

    totals: Dict[Category, Decimal] = {category: _ZERO for category in Category}
    for transaction in transactions:
        if transaction.transaction_type is TransactionType.EXPENSE:
            totals[transaction.category] += _exact(transaction.amount)
    return totals
