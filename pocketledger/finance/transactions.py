"""Mini README: Transaction data model shared by the ledger and storage.

Structure:
    * TransactionType - closed enum of income versus expense entries.
    * Category - closed enum of expense categories in display order.
    * Transaction - immutable record with (de)serialisation helpers.

The serialised form is a flat JSON object with the keys ``id``,
``description``, ``amount``, ``type``, ``category`` and ``date``. Parsing is
strict: ``Transaction.from_dict`` raises ``ValueError`` for anything that
would break the ledger invariants so the persistence layer can skip the
entry instead of loading bad data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping

_SERIALISED_FIELDS = ("id", "description", "amount", "type", "category", "date")


class TransactionType(str, Enum):
    """Enumerate the supported transaction types."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


class Category(str, Enum):
    """Closed set of categories; declaration order is the chart order."""

    FOOD = "food"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    UTILITIES = "utilities"
    SHOPPING = "shopping"
    OTHER = "other"

    @classmethod
    def from_str(cls, value: str) -> "Category":
        """Coerce arbitrary casing into a valid category."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported category: {value}") from error

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single recorded income or expense event."""

    transaction_id: int
    description: str
    amount: float
    transaction_type: TransactionType
    category: Category
    date: str

    @property
    def is_income(self) -> bool:
        return self.transaction_type is TransactionType.INCOME

    def as_dict(self) -> Dict[str, Any]:
        """Export the transaction using the persisted field names."""

        return {
            "id": self.transaction_id,
            "description": self.description,
            "amount": self.amount,
            "type": self.transaction_type.value,
            "category": self.category.value,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Transaction":
        """Rebuild a transaction, raising ``ValueError`` on malformed payloads."""

        if not isinstance(payload, Mapping):
            raise ValueError("Transaction entries must be JSON objects.")
        missing = [name for name in _SERIALISED_FIELDS if name not in payload]
        if missing:
            raise ValueError(f"Transaction entry is missing fields: {', '.join(missing)}")

        transaction_id = payload["id"]
        if isinstance(transaction_id, bool) or not isinstance(transaction_id, int):
            raise ValueError(f"Transaction id must be an integer, got {transaction_id!r}")

        description = payload["description"]
        if not isinstance(description, str) or not description.strip():
            raise ValueError(f"Transaction {transaction_id} has an empty description.")

        amount = payload["amount"]
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise ValueError(f"Transaction {transaction_id} amount is not numeric.")
        try:
            amount = float(amount)
        except OverflowError as error:
            raise ValueError(f"Transaction {transaction_id} amount is out of range.") from error
        if not math.isfinite(amount) or amount <= 0:
            raise ValueError(f"Transaction {transaction_id} amount must be positive.")

        date = payload["date"]
        if not isinstance(date, str):
            raise ValueError(f"Transaction {transaction_id} date must be a string.")

        return cls(
            transaction_id=transaction_id,
            description=description,
            amount=amount,
            transaction_type=TransactionType.from_str(payload["type"]),
            category=Category.from_str(payload["category"]),
            date=date,
        )
