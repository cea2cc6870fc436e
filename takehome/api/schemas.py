"""Request and response bodies for the calculation endpoints.

Engine results carry Decimal; responses render them as floats.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from takehome.analysis.hours_sweep import (
    DEFAULT_MAX_HOURS,
    MAX_SWEEP_HOURS,
    HourEvent,
    HourPoint,
    SweepResult,
    Zone,
)
from takehome.calculators.pay_run import PayRun
from takehome.calculators.paye import PayPeriodResult, PaySettings
from takehome.calculators.tax_data import JurisdictionConfig
from takehome.db.ledger import PAY_RUN_LABEL

# --- Requests ---


class IncomeTaxRequest(BaseModel):
    annual_income: Decimal


class DeductionsRequest(BaseModel):
    weekly_gross: Decimal
    settings: PaySettings = PaySettings()


class AbatementRequest(BaseModel):
    weekly_gross: Decimal
    base_benefit: Decimal


class PayRunRequest(BaseModel):
    """Hourly rate and the hours worked in each week of the pay run."""

    hourly_rate: Decimal
    hours: list[Decimal]
    settings: PaySettings = PaySettings()


class PayRunEntryRequest(PayRunRequest):
    """A pay run to record in the ledger; ``date`` defaults to today."""

    date: datetime.date | None = None
    label: str = PAY_RUN_LABEL


class SweepRequest(BaseModel):
    hourly_rate: Decimal
    settings: PaySettings = PaySettings()
    max_hours: int = Field(default=DEFAULT_MAX_HOURS, le=MAX_SWEEP_HOURS)


# --- Responses ---


class PayPeriodResponse(BaseModel):
    """One week of pay and benefit."""

    gross_weekly: float
    paye_weekly: float
    acc_weekly: float
    student_loan_weekly: float
    retirement_weekly: float
    total_deductions: float
    net_weekly: float
    benefit_weekly: float
    benefit_reduction: float

    @classmethod
    def from_result(cls, result: PayPeriodResult) -> "PayPeriodResponse":
        return cls(**{k: float(v) for k, v in result._asdict().items()})


class AbatementResponse(BaseModel):
    benefit_weekly: float
    benefit_reduction: float


class PayRunResponse(BaseModel):
    """Per-week breakdown and the total money in hand."""

    weeks: list[PayPeriodResponse]
    total_net: float
    total_benefit: float
    grand_total: float

    @classmethod
    def from_result(cls, run: PayRun) -> "PayRunResponse":
        return cls(
            weeks=[PayPeriodResponse.from_result(w) for w in run.weeks],
            total_net=float(run.total_net),
            total_benefit=float(run.total_benefit),
            grand_total=float(run.grand_total),
        )


class HourPointResponse(BaseModel):
    hours: int
    gross_weekly: float
    net_weekly: float
    benefit_weekly: float
    total_weekly: float
    marginal_delta: float
    zone: Zone
    event: HourEvent

    @classmethod
    def from_point(cls, point: HourPoint) -> "HourPointResponse":
        return cls(
            hours=point.hours,
            gross_weekly=float(point.gross_weekly),
            net_weekly=float(point.net_weekly),
            benefit_weekly=float(point.benefit_weekly),
            total_weekly=float(point.total_weekly),
            marginal_delta=float(point.marginal_delta),
            zone=point.zone,
            event=point.event,
        )


class SweepResponse(BaseModel):
    """Series for the hours chart and optimizer table."""

    points: list[HourPointResponse]
    sweet_zone_end_hour: int | None
    dead_zone_end_hour: int | None

    @classmethod
    def from_result(cls, result: SweepResult) -> "SweepResponse":
        return cls(
            points=[HourPointResponse.from_point(p) for p in result.points],
            sweet_zone_end_hour=result.sweet_zone_end_hour,
            dead_zone_end_hour=result.dead_zone_end_hour,
        )


class BracketResponse(BaseModel):
    lower: float
    upper: float | None
    rate: float


class JurisdictionResponse(BaseModel):
    """The constants every calculation on this server uses."""

    tax_year: str
    brackets: list[BracketResponse]
    acc_rate: float
    acc_max_liable_earnings: float
    student_loan_weekly_threshold: float
    student_loan_rate: float
    abatement_free_zone_weekly: float
    abatement_reduction_rate: float
    holiday_loading_rate: float

    @classmethod
    def from_config(cls, config: JurisdictionConfig) -> "JurisdictionResponse":
        return cls(
            tax_year=config.tax_year,
            brackets=[
                BracketResponse(
                    lower=float(b.lower),
                    upper=float(b.upper) if b.upper is not None else None,
                    rate=float(b.rate),
                )
                for b in config.brackets
            ],
            acc_rate=float(config.acc.rate),
            acc_max_liable_earnings=float(config.acc.max_liable_earnings),
            student_loan_weekly_threshold=float(config.student_loan.weekly_threshold),
            student_loan_rate=float(config.student_loan.repayment_rate),
            abatement_free_zone_weekly=float(config.abatement.free_zone_weekly),
            abatement_reduction_rate=float(config.abatement.reduction_rate),
            holiday_loading_rate=float(config.holiday_loading_rate),
        )
