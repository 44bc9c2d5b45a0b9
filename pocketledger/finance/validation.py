"""Mini README: Input boundary in front of the ledger.

Structure:
    * TransactionInputError - raised for input the ledger must never see.
    * TransactionDraft - validated arguments for ``LedgerStore.add``.
    * validate_transaction_input - check raw form/CLI values.
    * parse_type_filter / parse_category_filter - read filter selections.

Interfaces call these helpers with whatever the user typed. Anything
invalid raises ``TransactionInputError`` which the web app turns into an
HTTP 400 and the CLI into an error message, so the ledger itself can
assume every record it receives is valid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .derivations import ALL
from .transactions import Category, TransactionType

INVALID_ENTRY_MESSAGE = "Please enter a valid description and amount"


class TransactionInputError(ValueError):
    """User supplied values that cannot become a transaction."""

    def __init__(self, message: str = INVALID_ENTRY_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True, slots=True)
class TransactionDraft:
    """Validated values ready to be recorded."""

    description: str
    amount: float
    transaction_type: TransactionType
    category: Category


def _parse_amount(amount: object) -> float:
    if isinstance(amount, bool):
        raise TransactionInputError()
    if isinstance(amount, str):
        amount = amount.strip()
    try:
        value = float(amount)  # type: ignore[arg-type]
    except (TypeError, ValueError) as error:
        raise TransactionInputError() from error
    if not math.isfinite(value) or value <= 0:
        raise TransactionInputError()
    return value


def validate_transaction_input(
    description: object,
    amount: object,
    transaction_type: Union[TransactionType, str] = TransactionType.EXPENSE,
    category: Union[Category, str] = Category.OTHER,
) -> TransactionDraft:
    """Validate raw values and return a draft, raising ``TransactionInputError``."""

    if not isinstance(description, str) or not description.strip():
        raise TransactionInputError()
    value = _parse_amount(amount)
    try:
        parsed_type = TransactionType.from_str(transaction_type)
        parsed_category = Category.from_str(category)
    except ValueError as error:
        raise TransactionInputError(str(error)) from error
    return TransactionDraft(
        description=description.strip(),
        amount=value,
        transaction_type=parsed_type,
        category=parsed_category,
    )


def parse_type_filter(value: object) -> Union[TransactionType, str]:
    """Return ``ALL`` or the selected transaction type."""

    if value is None or str(value).strip().lower() in {"", ALL}:
        return ALL
    try:
        return TransactionType.from_str(str(value))
    except ValueError as error:
        raise TransactionInputError(str(error)) from error


def parse_category_filter(value: object) -> Union[Category, str]:
    """Return ``ALL`` or the selected category."""

    if value is None or str(value).strip().lower() in {"", ALL}:
        return ALL
    try:
        return Category.from_str(str(value))
    except ValueError as error:
        raise TransactionInputError(str(error)) from error
