"""ACC earner's levy calculator."""

from decimal import Decimal

from takehome.calculators.errors import check_non_negative
from takehome.calculators.tax_data import JURISDICTION, JurisdictionConfig

WEEKS_PER_YEAR = 52


def calculate_acc_levy(
    weekly_gross: Decimal,
    config: JurisdictionConfig = JURISDICTION,
) -> Decimal:
    """Calculate the weekly ACC earner's levy.

    The cap applies to the annualised gross, so the figure is only exact
    when the same weekly pay is assumed for the whole year.

    Args:
        weekly_gross: Gross pay for the week (must be >= 0).
        config: Jurisdiction table to apply.

    Returns:
        Weekly levy.
    """
    check_non_negative("Weekly gross", weekly_gross)

    acc = config.acc
    liable_earnings = min(weekly_gross * WEEKS_PER_YEAR, acc.max_liable_earnings)
    return liable_earnings * acc.rate / WEEKS_PER_YEAR
