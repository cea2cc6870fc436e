"""API routes for the take-home pay calculator."""

import logging
from datetime import date
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from takehome.analysis.hours_sweep import sweep
from takehome.api.schemas import (
    AbatementRequest,
    AbatementResponse,
    DeductionsRequest,
    IncomeTaxRequest,
    JurisdictionResponse,
    PayPeriodResponse,
    PayRunEntryRequest,
    PayRunRequest,
    PayRunResponse,
    SweepRequest,
    SweepResponse,
)
from takehome.calculators.abatement import calculate_abatement
from takehome.calculators.errors import ValidationError
from takehome.calculators.income_tax import calculate_income_tax
from takehome.calculators.pay_run import calculate_pay_run
from takehome.calculators.paye import calculate_pay_period
from takehome.calculators.tax_data import JURISDICTION, JurisdictionConfig
from takehome.db.ledger import (
    add_transaction,
    delete_transaction,
    list_week,
    pay_run_transaction,
    shift_week,
    update_transaction,
)
from takehome.db.models import Preferences, Transaction, TransactionIn, WeekLedger
from takehome.db.preferences import load_preferences, save_preferences

logger = logging.getLogger(__name__)

router = APIRouter()


def _jurisdiction(request: Request) -> JurisdictionConfig:
    """The table loaded at startup, or the bundled default when there was no lifespan."""
    return getattr(request.app.state, "jurisdiction", JURISDICTION)


def _unprocessable(exc: ValidationError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=422)


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "tax_year": _jurisdiction(request).tax_year}


# --- Calculators ---


@router.get("/jurisdiction", response_model=JurisdictionResponse)
async def jurisdiction(request: Request) -> JurisdictionResponse:
    """Return the brackets, levies and abatement constants in force."""
    return JurisdictionResponse.from_config(_jurisdiction(request))


@router.post("/tax/income")
async def income_tax(body: IncomeTaxRequest, request: Request) -> Any:
    """Annual income tax with a per-bracket breakdown."""
    try:
        return calculate_income_tax(body.annual_income, _jurisdiction(request))
    except ValidationError as exc:
        return _unprocessable(exc)


@router.post("/deductions", response_model=PayPeriodResponse)
async def deductions(body: DeductionsRequest, request: Request) -> Any:
    """Deductions, net pay and abated benefit for one week's gross."""
    try:
        result = calculate_pay_period(body.weekly_gross, body.settings, _jurisdiction(request))
    except ValidationError as exc:
        return _unprocessable(exc)
    return PayPeriodResponse.from_result(result)


@router.post("/abatement", response_model=AbatementResponse)
async def abatement(body: AbatementRequest, request: Request) -> Any:
    """Benefit remaining after abatement on one week's gross."""
    try:
        benefit = calculate_abatement(body.weekly_gross, body.base_benefit, _jurisdiction(request))
    except ValidationError as exc:
        return _unprocessable(exc)
    return AbatementResponse(
        benefit_weekly=float(benefit),
        benefit_reduction=float(body.base_benefit - benefit),
    )


@router.post("/calculate", response_model=PayRunResponse)
async def calculate(body: PayRunRequest, request: Request) -> Any:
    """Pay run over one or more weeks of hours."""
    try:
        run = calculate_pay_run(body.hourly_rate, body.hours, body.settings, _jurisdiction(request))
    except ValidationError as exc:
        return _unprocessable(exc)
    return PayRunResponse.from_result(run)


@router.post("/sweep", response_model=SweepResponse)
async def hours_sweep(body: SweepRequest, request: Request) -> Any:
    """Total income at each hour from 0 to max_hours, with zones and events."""
    try:
        result = sweep(body.hourly_rate, body.settings, body.max_hours, _jurisdiction(request))
    except ValidationError as exc:
        return _unprocessable(exc)
    return SweepResponse.from_result(result)


# --- Ledger ---


@router.get("/transactions", response_model=WeekLedger)
async def week_transactions(request: Request, week_of: date | None = None, offset: int = 0) -> WeekLedger:
    """Transactions for the week containing ``week_of`` (default today), shifted by ``offset`` weeks."""
    day = shift_week(week_of or date.today(), offset)
    return await list_week(request.app.state.pool, day)


@router.post("/transactions", response_model=Transaction, status_code=201)
async def create_transaction(body: TransactionIn, request: Request) -> Transaction:
    """Record an income or expense."""
    return await add_transaction(request.app.state.pool, body)


@router.post("/transactions/from-pay-run", response_model=Transaction, status_code=201)
async def record_pay_run(body: PayRunEntryRequest, request: Request) -> Any:
    """Calculate a pay run and record its money in hand as income."""
    try:
        run = calculate_pay_run(body.hourly_rate, body.hours, body.settings, _jurisdiction(request))
        txn = pay_run_transaction(run, body.date or date.today(), body.label)
    except ValidationError as exc:
        return _unprocessable(exc)
    return await add_transaction(request.app.state.pool, txn)


@router.put("/transactions/{txn_id}")
async def edit_transaction(txn_id: UUID, body: TransactionIn, request: Request) -> JSONResponse:
    """Replace a transaction."""
    updated = await update_transaction(request.app.state.pool, txn_id, body)
    if not updated:
        return JSONResponse({"error": "Transaction not found"}, status_code=404)
    return JSONResponse({"status": "ok"})


@router.delete("/transactions/{txn_id}")
async def remove_transaction(txn_id: UUID, request: Request) -> JSONResponse:
    """Delete a transaction."""
    deleted = await delete_transaction(request.app.state.pool, txn_id)
    if not deleted:
        return JSONResponse({"error": "Transaction not found"}, status_code=404)
    return JSONResponse({"status": "ok"})


# --- Preferences ---


@router.get("/preferences", response_model=Preferences)
async def get_preferences(request: Request) -> Preferences:
    """Stored calculator inputs."""
    return await load_preferences(request.app.state.pool)


@router.put("/preferences", response_model=Preferences)
async def put_preferences(body: Preferences, request: Request) -> Preferences:
    """Save calculator inputs."""
    await save_preferences(request.app.state.pool, body)
    return body
