"""Multi-week pay run: hours worked per week to net pay plus benefit."""

from decimal import Decimal
from typing import NamedTuple

from takehome.calculators.errors import ValidationError, check_non_negative
from takehome.calculators.paye import PayPeriodResult, PaySettings, calculate_pay_period
from takehome.calculators.tax_data import JURISDICTION, JurisdictionConfig

MAX_PAY_RUN_WEEKS = 52


class PayRun(NamedTuple):
    """Per-week results and totals for a pay run."""

    weeks: tuple[PayPeriodResult, ...]
    total_net: Decimal
    total_benefit: Decimal
    grand_total: Decimal


def weekly_gross(
    hourly_rate: Decimal,
    hours: Decimal | int,
    settings: PaySettings,
    config: JurisdictionConfig = JURISDICTION,
) -> Decimal:
    """Gross pay for ``hours`` at ``hourly_rate``, with holiday pay loading if chosen."""
    gross = hourly_rate * hours
    if settings.has_holiday_loading:
        gross *= 1 + config.holiday_loading_rate
    return gross


def calculate_pay_run(
    hourly_rate: Decimal,
    weekly_hours: list[Decimal],
    settings: PaySettings,
    config: JurisdictionConfig = JURISDICTION,
) -> PayRun:
    """Calculate each week of a pay run and the money in hand across all of them.

    Args:
        hourly_rate: Pay per hour (must be >= 0).
        weekly_hours: Hours worked in each week, 1 to 52 entries.
        settings: Deduction and benefit options.
        config: Jurisdiction table to apply.

    Raises:
        ValidationError: on negative rate or hours, or a bad week count.
    """
    check_non_negative("Hourly rate", hourly_rate)
    if not 1 <= len(weekly_hours) <= MAX_PAY_RUN_WEEKS:
        raise ValidationError(
            f"A pay run covers 1 to {MAX_PAY_RUN_WEEKS} weeks, got {len(weekly_hours)}."
        )

    weeks: list[PayPeriodResult] = []
    for index, hours in enumerate(weekly_hours, start=1):
        check_non_negative(f"Week {index} hours", hours)
        gross = weekly_gross(hourly_rate, hours, settings, config)
        weeks.append(calculate_pay_period(gross, settings, config))

    total_net = sum((w.net_weekly for w in weeks), Decimal("0"))
    total_benefit = sum((w.benefit_weekly for w in weeks), Decimal("0"))

    return PayRun(
        weeks=tuple(weeks),
        total_net=total_net,
        total_benefit=total_benefit,
        grand_total=total_net + total_benefit,
    )
