"""Hours sweep: total weekly income at every whole hour from 0 to max_hours.

Each point is classified into a zone:

- sweet: gross is inside the abatement free zone, benefit untouched;
- dead: benefit is abating while wages are taxed, so each extra hour
  is worth little;
- breakout: benefit has reached zero and income is wage-only.

Events flag the hours worth pointing out on a chart: the last sweet hour
before the free zone runs out, dead-zone hours gaining under $2, and the
first hour off the benefit entirely.
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import NamedTuple

from takehome.calculators.errors import ValidationError, check_non_negative
from takehome.calculators.pay_run import weekly_gross
from takehome.calculators.paye import PaySettings, calculate_pay_period
from takehome.calculators.tax_data import JURISDICTION, JurisdictionConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOURS = 50
MAX_SWEEP_HOURS = 168  # every hour in a week
STAGNATION_THRESHOLD = Decimal("2")


class Zone(str, Enum):
    """Where an hour falls relative to the abatement free zone and benefit cut-out."""

    SWEET = "sweet"
    DEAD = "dead"
    BREAKOUT = "breakout"


class HourEvent(str, Enum):
    """Notable change at an hour; at most one per point."""

    NONE = "none"
    WARNING = "warning"
    STAGNATION = "stagnation"
    FREEDOM = "freedom"


class HourPoint(NamedTuple):
    """One row of the sweep."""

    hours: int
    gross_weekly: Decimal
    net_weekly: Decimal
    benefit_weekly: Decimal
    total_weekly: Decimal
    marginal_delta: Decimal
    zone: Zone
    event: HourEvent


class SweepResult(NamedTuple):
    """Ordered points plus the last hour of each zone, for shading chart regions."""

    points: tuple[HourPoint, ...]
    sweet_zone_end_hour: int | None
    dead_zone_end_hour: int | None


def _classify(gross: Decimal, benefit: Decimal, config: JurisdictionConfig) -> Zone:
    if gross <= config.abatement.free_zone_weekly:
        return Zone.SWEET
    if benefit > 0:
        return Zone.DEAD
    return Zone.BREAKOUT


def sweep(
    hourly_rate: Decimal,
    settings: PaySettings,
    max_hours: int = DEFAULT_MAX_HOURS,
    config: JurisdictionConfig = JURISDICTION,
) -> SweepResult:
    """Evaluate the engine at every hour from 0 to ``max_hours`` inclusive.

    A non-positive ``hourly_rate`` yields an empty result.

    Raises:
        ValidationError: if ``max_hours`` is negative or above MAX_SWEEP_HOURS,
            or the settings make deductions exceed gross at some hour.
    """
    check_non_negative("Max hours", max_hours)
    if max_hours > MAX_SWEEP_HOURS:
        raise ValidationError(f"Max hours must be at most {MAX_SWEEP_HOURS}, got {max_hours}.")
    if hourly_rate <= 0:
        return SweepResult(points=(), sweet_zone_end_hour=None, dead_zone_end_hour=None)

    free_zone = config.abatement.free_zone_weekly
    points: list[HourPoint] = []
    sweet_end: int | None = None
    dead_end: int | None = None

    for hours in range(max_hours + 1):
        gross = weekly_gross(hourly_rate, hours, settings, config)
        period = calculate_pay_period(gross, settings, config)
        total = period.net_weekly + period.benefit_weekly

        previous = points[-1] if points else None
        marginal = total - previous.total_weekly if previous is not None else Decimal("0")
        zone = _classify(gross, period.benefit_weekly, config)

        event = HourEvent.NONE
        if zone is Zone.SWEET and weekly_gross(hourly_rate, hours + 1, settings, config) > free_zone:
            event = HourEvent.WARNING
        if zone is Zone.DEAD and previous is not None and marginal < STAGNATION_THRESHOLD:
            event = HourEvent.STAGNATION
        if zone is Zone.BREAKOUT and previous is not None and previous.benefit_weekly > 0:
            event = HourEvent.FREEDOM

        if zone is Zone.SWEET:
            sweet_end = hours
        elif zone is Zone.DEAD:
            dead_end = hours

        points.append(HourPoint(
            hours=hours,
            gross_weekly=gross,
            net_weekly=period.net_weekly,
            benefit_weekly=period.benefit_weekly,
            total_weekly=total,
            marginal_delta=marginal,
            zone=zone,
            event=event,
        ))

    logger.debug(
        "Swept %d hours at %s/h: sweet to %s, dead to %s",
        max_hours, hourly_rate, sweet_end, dead_end,
    )
    return SweepResult(points=tuple(points), sweet_zone_end_hour=sweet_end, dead_zone_end_hour=dead_end)
