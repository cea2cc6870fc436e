"""Main-benefit abatement calculator."""

from decimal import Decimal

from takehome.calculators.errors import check_non_negative
from takehome.calculators.tax_data import JURISDICTION, JurisdictionConfig


def calculate_abatement(
    weekly_gross: Decimal,
    base_benefit: Decimal,
    config: JurisdictionConfig = JURISDICTION,
) -> Decimal:
    """Return the weekly benefit left after abatement.

    Earnings up to the free zone leave the benefit untouched. Every dollar
    above it reduces the benefit by the reduction rate, down to zero.

    Raises:
        ValidationError: if either amount is negative.
    """
    check_non_negative("Weekly gross", weekly_gross)
    check_non_negative("Base benefit", base_benefit)

    abatement = config.abatement
    if weekly_gross <= abatement.free_zone_weekly:
        return base_benefit

    reduction = (weekly_gross - abatement.free_zone_weekly) * abatement.reduction_rate
    return max(Decimal("0"), base_benefit - reduction)
