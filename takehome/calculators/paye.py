"""PAYE deduction stack — composites income tax, ACC, student loan, KiwiSaver and abatement."""

from decimal import Decimal
from typing import NamedTuple

from pydantic import BaseModel, Field

from takehome.calculators.abatement import calculate_abatement
from takehome.calculators.acc import WEEKS_PER_YEAR, calculate_acc_levy
from takehome.calculators.errors import ValidationError, check_non_negative, check_ratio
from takehome.calculators.income_tax import calculate_paye
from takehome.calculators.student_loan import calculate_student_loan_repayment
from takehome.calculators.tax_data import JURISDICTION, JurisdictionConfig


class PaySettings(BaseModel):
    """Per-calculation options chosen by the worker."""

    has_holiday_loading: bool = False
    has_student_loan: bool = False
    has_retirement_contribution: bool = False
    retirement_rate: Decimal = Field(default=Decimal("0.03"), ge=0, le=1)  # KiwiSaver employee rate
    base_weekly_benefit: Decimal = Field(default=Decimal("0"), ge=0)

    model_config = {"frozen": True}


class Deductions(NamedTuple):
    """Weekly deductions taken from gross pay."""

    paye: Decimal
    acc: Decimal
    student_loan: Decimal
    retirement: Decimal
    total: Decimal


class PayPeriodResult(NamedTuple):
    """Everything the worker receives for one week."""

    gross_weekly: Decimal
    paye_weekly: Decimal
    acc_weekly: Decimal
    student_loan_weekly: Decimal
    retirement_weekly: Decimal
    total_deductions: Decimal
    net_weekly: Decimal
    benefit_weekly: Decimal
    benefit_reduction: Decimal


def _check_settings(settings: PaySettings) -> None:
    # PaySettings validates on construction; model_construct() skips that.
    check_ratio("Retirement rate", settings.retirement_rate)
    check_non_negative("Base weekly benefit", settings.base_weekly_benefit)


def calculate_deductions(
    weekly_gross: Decimal,
    settings: PaySettings,
    config: JurisdictionConfig = JURISDICTION,
) -> Deductions:
    """Calculate the weekly deduction stack.

    PAYE is worked out on the annualised gross and divided back down to a
    week, rather than taxing each week on its own. That matches how the
    weekly PAYE tables treat a steady wage.

    Args:
        weekly_gross: Gross pay for the week (must be >= 0).
        settings: Which optional deductions apply.
        config: Jurisdiction table to apply.

    Raises:
        ValidationError: on negative pay, a rate outside [0, 1], or
            deductions that would exceed the gross.
    """
    check_non_negative("Weekly gross", weekly_gross)
    _check_settings(settings)

    paye = calculate_paye(weekly_gross * WEEKS_PER_YEAR, config) / WEEKS_PER_YEAR
    acc = calculate_acc_levy(weekly_gross, config)

    student_loan = Decimal("0")
    if settings.has_student_loan:
        student_loan = calculate_student_loan_repayment(weekly_gross, config)

    retirement = Decimal("0")
    if settings.has_retirement_contribution:
        retirement = weekly_gross * settings.retirement_rate

    total = paye + acc + student_loan + retirement
    if total > weekly_gross:
        raise ValidationError(
            f"Deductions of {total:.2f} exceed weekly gross of {weekly_gross:.2f}; "
            "lower the retirement contribution rate."
        )

    return Deductions(
        paye=paye,
        acc=acc,
        student_loan=student_loan,
        retirement=retirement,
        total=total,
    )


def calculate_pay_period(
    weekly_gross: Decimal,
    settings: PaySettings,
    config: JurisdictionConfig = JURISDICTION,
) -> PayPeriodResult:
    """Calculate net pay and abated benefit for one week."""
    deductions = calculate_deductions(weekly_gross, settings, config)
    benefit = calculate_abatement(weekly_gross, settings.base_weekly_benefit, config)

    return PayPeriodResult(
        gross_weekly=weekly_gross,
        paye_weekly=deductions.paye,
        acc_weekly=deductions.acc,
        student_loan_weekly=deductions.student_loan,
        retirement_weekly=deductions.retirement,
        total_deductions=deductions.total,
        net_weekly=weekly_gross - deductions.total,
        benefit_weekly=benefit,
        benefit_reduction=settings.base_weekly_benefit - benefit,
    )
