"""Mini README: Core package initialiser for PocketLedger.

PocketLedger records income and expense transactions, persists them to a
key-value store, and derives balances, filtered lists and per-category
expense totals for the web dashboard and the command line. Subpackages:

    * finance - ledger store, derivations and input validation.
    * storage - key-value backends and the ledger persistence adapter.
    * interface - presentation helpers and the FastAPI dashboard.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
