"""Mini README: FastAPI dashboard bound to the ledger.

Structure:
    * create_application - application factory wiring routes and templates.
    * Dashboard state - summary and chart recomputed after each mutation.

The web layer is a consumer of the finance core: it validates form input
at the boundary, calls ``LedgerStore.add``/``remove``, and renders the
derived data produced by ``interface.presentation``. HTML routes serve the
browser dashboard; JSON routes expose the same data for scripts and tests.
Routes that touch the ledger are plain functions, so FastAPI runs them on
its worker threads and the store lock serialises concurrent mutations. The
dashboard subscribes to the ledger when the app is built and detaches when
the app shuts down.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import get_settings
from ..finance import (
    ALL,
    Category,
    LedgerStore,
    TransactionInputError,
    TransactionType,
    parse_category_filter,
    parse_type_filter,
    validate_transaction_input,
)
from ..logging_utils import configure_root_logger, get_logger
from ..storage import create_ledger_store
from .presentation import DashboardView, build_dashboard, transaction_rows

LOGGER = get_logger(__name__)


def create_application(ledger: Optional[LedgerStore] = None) -> FastAPI:
    """Create the FastAPI application around ``ledger`` or the configured one."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    if ledger is None:
        ledger = create_ledger_store(settings)
    currency_symbol = settings.currency_symbol

    dashboard_state: Dict[str, DashboardView] = {}

    def recompute(snapshot) -> None:
        dashboard_state["overview"] = build_dashboard(snapshot, currency_symbol=currency_symbol)
        LOGGER.debug(
            "Dashboard recomputed -> %s transactions, balance %s",
            len(snapshot),
            dashboard_state["overview"].formatted_summary["balance"],
        )

    recompute(ledger.all())
    unsubscribe = ledger.subscribe(recompute)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        unsubscribe()
        LOGGER.debug("Dashboard detached from ledger")

    app = FastAPI(title="PocketLedger", version="0.1.0", lifespan=lifespan)
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")
    app.state.ledger = ledger

    def resolve_filters(type_filter: str, category_filter: str):
        try:
            return parse_type_filter(type_filter), parse_category_filter(category_filter)
        except TransactionInputError as error:
            raise HTTPException(status_code=400, detail=error.message) from error

    def render_dashboard(
        request: Request,
        view: DashboardView,
        *,
        notification: Optional[str] = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "view": view,
                "notification": notification,
                "transaction_types": [member.value for member in TransactionType],
                "categories": [member.value for member in Category],
                "all_sentinel": ALL,
            },
            status_code=status_code,
        )

    @app.get("/", response_class=HTMLResponse)
    def dashboard(
        request: Request,
        type_filter: str = Query(ALL, alias="type"),
        category_filter: str = Query(ALL, alias="category"),
    ) -> HTMLResponse:
        """Render the dashboard with the requested filters applied."""

        parsed_type, parsed_category = resolve_filters(type_filter, category_filter)
        view = build_dashboard(ledger.all(), parsed_type, parsed_category, currency_symbol)
        LOGGER.debug("Rendering dashboard with %s rows", len(view.rows))
        return render_dashboard(request, view)

    @app.post("/add", response_class=HTMLResponse)
    def add_from_form(
        request: Request,
        description: str = Form(""),
        amount: str = Form(""),
        transaction_type: str = Form(TransactionType.EXPENSE.value, alias="type"),
        category: str = Form(Category.OTHER.value),
    ):
        """Handle the dashboard form, redirecting back on success."""

        try:
            draft = validate_transaction_input(description, amount, transaction_type, category)
        except TransactionInputError as error:
            LOGGER.info("Rejected dashboard entry: %s", error.message)
            view = build_dashboard(ledger.all(), currency_symbol=currency_symbol)
            return render_dashboard(request, view, notification=error.message, status_code=400)
        ledger.add(draft.description, draft.amount, draft.transaction_type, draft.category)
        return RedirectResponse("/", status_code=303)

    @app.post("/transactions/{transaction_id}/delete")
    def delete_from_form(transaction_id: int) -> RedirectResponse:
        """Delete via the dashboard button and return to the dashboard."""

        ledger.remove(transaction_id)
        return RedirectResponse("/", status_code=303)

    @app.get("/transactions")
    def list_transactions(
        type_filter: str = Query(ALL, alias="type"),
        category_filter: str = Query(ALL, alias="category"),
    ) -> JSONResponse:
        """Return the filtered transaction rows."""

        parsed_type, parsed_category = resolve_filters(type_filter, category_filter)
        view = build_dashboard(ledger.all(), parsed_type, parsed_category, currency_symbol)
        return JSONResponse(
            {
                "type": view.type_filter,
                "category": view.category_filter,
                "transactions": view.rows,
                "message": view.list_message,
            }
        )

    @app.post("/transactions")
    def create_transaction(
        description: str = Form(""),
        amount: str = Form(""),
        transaction_type: str = Form(TransactionType.EXPENSE.value, alias="type"),
        category: str = Form(Category.OTHER.value),
    ) -> JSONResponse:
        """Record a transaction submitted as form data."""

        try:
            draft = validate_transaction_input(description, amount, transaction_type, category)
        except TransactionInputError as error:
            raise HTTPException(status_code=400, detail=error.message) from error
        transaction = ledger.add(
            draft.description, draft.amount, draft.transaction_type, draft.category
        )
        payload: Dict[str, Any] = transaction_rows([transaction], currency_symbol)[0]
        return JSONResponse(payload, status_code=201)

    @app.delete("/transactions/{transaction_id}")
    def delete_transaction(transaction_id: int) -> JSONResponse:
        """Remove a transaction; unknown ids report ``removed: false``."""

        removed = ledger.remove(transaction_id)
        return JSONResponse(
            {"id": transaction_id, "removed": removed, "count": len(ledger)}
        )

    @app.get("/summary")
    async def summary() -> JSONResponse:
        """Return income, expense and balance totals."""

        return JSONResponse(dashboard_state["overview"].summary_payload())

    @app.get("/chart")
    async def chart() -> JSONResponse:
        """Return per-category expense totals and the bars to draw."""

        return JSONResponse(dashboard_state["overview"].chart_payload())

    return app
