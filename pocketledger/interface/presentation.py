"""Mini README: Display-ready view models built from ledger derivations.

Structure:
    * CATEGORY_COLOURS - badge colour per category.
    * format_amount - two-decimal currency strings.
    * balance_tone - ``positive``/``negative`` styling hint for the balance.
    * transaction_rows - table rows with signed amounts and badge colours.
    * ChartBar / chart_bars - proportional bars for non-zero categories.
    * DashboardView / build_dashboard - everything a view needs in one object.

These helpers sit between the pure derivations and any renderer (the
Jinja2 dashboard, the JSON API, the terminal). They decide what is shown
but never how, and they never touch the ledger directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..finance.derivations import (
    ALL,
    CategoryFilter,
    LedgerSummary,
    TypeFilter,
    aggregate_by_category,
    filter_transactions,
    summarize,
)
from ..finance.transactions import Category, Transaction

EMPTY_LIST_MESSAGE = "No transactions found"
EMPTY_CHART_MESSAGE = "No expense data to display"

CATEGORY_COLOURS: Dict[Category, str] = {
    Category.FOOD: "#e74c3c",
    Category.TRANSPORT: "#3498db",
    Category.ENTERTAINMENT: "#9b59b6",
    Category.UTILITIES: "#2ecc71",
    Category.SHOPPING: "#f39c12",
    Category.OTHER: "#95a5a6",
}

BALANCE_COLOURS = {"positive": "#27ae60", "negative": "#e74c3c"}

Number = Union[Decimal, float, int]


def format_amount(value: Number, currency_symbol: str = "$") -> str:
    """Render ``value`` with two decimals, placing a minus sign before the symbol."""

    amount = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{abs(amount):.2f}"


def balance_tone(balance: Number) -> str:
    """Return ``negative`` for a deficit, otherwise ``positive``."""

    return "negative" if balance < 0 else "positive"


def transaction_rows(
    transactions: Iterable[Transaction], currency_symbol: str = "$"
) -> List[Dict[str, Any]]:
    """Flatten transactions into table rows."""

    rows: List[Dict[str, Any]] = []
    for transaction in transactions:
        prefix = "+" if transaction.is_income else "-"
        rows.append(
            {
                "id": transaction.transaction_id,
                "description": transaction.description,
                "amount": transaction.amount,
                "display_amount": f"{prefix}{format_amount(transaction.amount, currency_symbol)}",
                "tone": transaction.transaction_type.value,
                "category": transaction.category.value,
                "category_colour": CATEGORY_COLOURS[transaction.category],
                "date": transaction.date,
            }
        )
    return rows


@dataclass(frozen=True, slots=True)
class ChartBar:
    """One bar of the expense chart."""

    category: Category
    total: Decimal
    label: str
    width_percent: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "total": float(self.total),
            "label": self.label,
            "width_percent": self.width_percent,
        }


def chart_bars(
    totals: Mapping[Category, Decimal], currency_symbol: str = "$"
) -> List[ChartBar]:
    """Build bars for non-zero totals, scaled so the largest spans 100%.

    Zero categories are left out. When every total is zero the result is
    empty and callers show ``EMPTY_CHART_MESSAGE`` instead.
    """

    maximum = max(totals.values(), default=Decimal("0"))
    if maximum <= 0:
        return []
    bars: List[ChartBar] = []
    for category, total in totals.items():
        if total <= 0:
            continue
        bars.append(
            ChartBar(
                category=category,
                total=total,
                label=f"{category.label}: {format_amount(total, currency_symbol)}",
                width_percent=round(float(total / maximum * 100), 2),
            )
        )
    return bars


@dataclass(slots=True)
class DashboardView:
    """Everything needed to render the dashboard once."""

    type_filter: str
    category_filter: str
    rows: List[Dict[str, Any]]
    summary: LedgerSummary
    category_totals: Dict[Category, Decimal]
    bars: List[ChartBar]
    currency_symbol: str = "$"
    list_message: Optional[str] = None
    chart_message: Optional[str] = None
    formatted_summary: Dict[str, str] = field(default_factory=dict)

    @property
    def balance_tone(self) -> str:
        return balance_tone(self.summary.balance)

    @property
    def balance_colour(self) -> str:
        return BALANCE_COLOURS[self.balance_tone]

    def summary_payload(self) -> Dict[str, Any]:
        """Summary totals plus their display strings for JSON responses."""

        return {
            **self.summary.as_dict(),
            "formatted": dict(self.formatted_summary),
            "balance_tone": self.balance_tone,
        }

    def chart_payload(self) -> Dict[str, Any]:
        """Full category totals and the bars worth drawing."""

        return {
            "totals": {category.value: float(total) for category, total in self.category_totals.items()},
            "bars": [bar.as_dict() for bar in self.bars],
            "message": self.chart_message,
        }


def build_dashboard(
    transactions: Iterable[Transaction],
    type_filter: TypeFilter = ALL,
    category_filter: CategoryFilter = ALL,
    currency_symbol: str = "$",
) -> DashboardView:
    """Derive the filtered list, summary and chart from one ledger snapshot."""

    snapshot = list(transactions)
    visible = filter_transactions(snapshot, type_filter, category_filter)
    summary = summarize(snapshot)
    totals = aggregate_by_category(snapshot)
    bars = chart_bars(totals, currency_symbol)
    return DashboardView(
        type_filter=str(getattr(type_filter, "value", type_filter)),
        category_filter=str(getattr(category_filter, "value", category_filter)),
        rows=transaction_rows(visible, currency_symbol),
        summary=summary,
        category_totals=totals,
        bars=bars,
        currency_symbol=currency_symbol,
        list_message=None if visible else EMPTY_LIST_MESSAGE,
        chart_message=None if bars else EMPTY_CHART_MESSAGE,
        formatted_summary={
            "total_income": format_amount(summary.total_income, currency_symbol),
            "total_expenses": format_amount(summary.total_expenses, currency_symbol),
            "balance": format_amount(summary.balance, currency_symbol),
        },
    )
