"""Mini README: Command line entry point for PocketLedger.

This script exposes a Typer CLI that records and removes transactions,
prints the filtered list, the summary and a text bar chart, lists the
storage backends, and starts the FastAPI dashboard. Ledger commands open
the store configured through ``POCKETLEDGER_*`` environment variables, so
the CLI and the web dashboard share the same stored data.
"""

from __future__ import annotations

from typing import NoReturn

import typer
import uvicorn

from pocketledger.configuration import get_settings
from pocketledger.finance import (
    ALL,
    Category,
    LedgerStore,
    TransactionInputError,
    TransactionType,
    parse_category_filter,
    parse_type_filter,
    validate_transaction_input,
)
from pocketledger.interface.presentation import build_dashboard
from pocketledger.logging_utils import configure_root_logger
from pocketledger.storage import REGISTRY, create_ledger_store

cli = typer.Typer(help="Track income and expenses from the terminal.")


def _open_ledger() -> LedgerStore:
    settings = get_settings()
    configure_root_logger(settings.log_level)
    return create_ledger_store(settings)


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


@cli.command(context_settings={"ignore_unknown_options": True})
def add(
    description: str = typer.Argument(..., help="What the transaction was for."),
    amount: str = typer.Argument(..., help="Positive amount, e.g. 12.50."),
    transaction_type: str = typer.Option(
        TransactionType.EXPENSE.value, "--type", "-t", help="income or expense."
    ),
    category: str = typer.Option(
        Category.OTHER.value,
        "--category",
        "-c",
        help="food, transport, entertainment, utilities, shopping or other.",
    ),
) -> None:
    """Record a new transaction."""

    try:
        draft = validate_transaction_input(description, amount, transaction_type, category)
    except TransactionInputError as error:
        _fail(error.message)
    ledger = _open_ledger()
    transaction = ledger.add(
        draft.description, draft.amount, draft.transaction_type, draft.category
    )
    typer.echo(
        f"Added {transaction.transaction_type.value} #{transaction.transaction_id}: "
        f"{transaction.description} ({transaction.amount:.2f})"
    )


@cli.command()
def remove(transaction_id: int = typer.Argument(..., help="Id shown by `list`.")) -> None:
    """Delete a transaction by id."""

    ledger = _open_ledger()
    if ledger.remove(transaction_id):
        typer.echo(f"Removed transaction #{transaction_id}.")
    else:
        typer.echo(f"No transaction with id {transaction_id}; nothing removed.")


@cli.command("list")
def list_transactions(
    transaction_type: str = typer.Option(ALL, "--type", "-t", help="all, income or expense."),
    category: str = typer.Option(ALL, "--category", "-c", help="all or a category name."),
) -> None:
    """Print transactions matching the filters."""

    try:
        type_filter = parse_type_filter(transaction_type)
        category_filter = parse_category_filter(category)
    except TransactionInputError as error:
        _fail(error.message)
    ledger = _open_ledger()
    view = build_dashboard(
        ledger.all(), type_filter, category_filter, get_settings().currency_symbol
    )
    if view.list_message:
        typer.echo(view.list_message)
        return
    for row in view.rows:
        typer.echo(
            f"{row['id']:>14}  {row['date']:<10}  {row['display_amount']:>12}  "
            f"{row['category']:<13}  {row['description']}"
        )


@cli.command()
def summary() -> None:
    """Print total income, total expenses and the balance."""

    ledger = _open_ledger()
    view = build_dashboard(ledger.all(), currency_symbol=get_settings().currency_symbol)
    typer.echo(f"Total income:   {view.formatted_summary['total_income']}")
    typer.echo(f"Total expenses: {view.formatted_summary['total_expenses']}")
    typer.echo(f"Balance:        {view.formatted_summary['balance']}")


@cli.command()
def chart(width: int = typer.Option(40, min=1, help="Characters used by the longest bar.")) -> None:
    """Draw expenses per category as a text bar chart."""

    ledger = _open_ledger()
    view = build_dashboard(ledger.all(), currency_symbol=get_settings().currency_symbol)
    if view.chart_message:
        typer.echo(view.chart_message)
        return
    for bar in view.bars:
        length = max(1, round(width * bar.width_percent / 100))
        typer.echo(bar.label)
        typer.echo("#" * length)


@cli.command()
def backends() -> None:
    """List the storage backends POCKETLEDGER_STORAGE_BACKEND accepts."""

    selected = get_settings().storage_backend
    for entry in REGISTRY.describe_backends():
        marker = "*" if entry["backend"] == selected else " "
        lifetime = "persistent" if entry["persistent"] else "process only"
        typer.echo(f"{marker} {entry['backend']:<8} {lifetime:<13} {entry['summary']}")


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI dashboard using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: wildcard, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting PocketLedger on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "pocketledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


if __name__ == "__main__":
    cli()
