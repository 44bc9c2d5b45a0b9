"""Mini README: Finance core for PocketLedger.

The ledger store owns the ordered transaction list and persists it after
every change; derivations compute filtered lists, totals and per-category
expense sums from a snapshot; validation guards the boundary so only
well-formed transactions reach the store.
"""

from .derivations import (
    ALL,
    LedgerSummary,
    aggregate_by_category,
    filter_transactions,
    summarize,
)
from .ledger import LedgerStore
from .transactions import Category, Transaction, TransactionType
from .validation import (
    TransactionDraft,
    TransactionInputError,
    parse_category_filter,
    parse_type_filter,
    validate_transaction_input,
)

__all__ = [
    "ALL",
    "Category",
    "LedgerStore",
    "LedgerSummary",
    "Transaction",
    "TransactionDraft",
    "TransactionInputError",
    "TransactionType",
    "aggregate_by_category",
    "filter_transactions",
    "parse_category_filter",
    "parse_type_filter",
    "summarize",
    "validate_transaction_input",
]
