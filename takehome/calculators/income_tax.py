"""Income tax (PAYE) calculator — marginal bracket accumulator and per-bracket breakdown."""

from decimal import Decimal
from typing import Any

from takehome.calculators.errors import check_non_negative
from takehome.calculators.tax_data import JURISDICTION, JurisdictionConfig


def calculate_paye(
    annual_gross: Decimal,
    config: JurisdictionConfig = JURISDICTION,
) -> Decimal:
    """Calculate annual income tax on ``annual_gross``.

    Each bracket taxes the slice of income between its lower and upper
    bound at its own rate. Stops as soon as the income is used up.

    Raises:
        ValidationError: if ``annual_gross`` is negative.
    """
    check_non_negative("Annual gross", annual_gross)

    tax = Decimal("0")
    remaining = annual_gross

    for bracket in config.brackets:
        if remaining <= 0:
            break

        width = remaining if bracket.upper is None else bracket.upper - bracket.lower
        taxable = min(remaining, width)
        tax += taxable * bracket.rate
        remaining -= taxable

    return tax


def calculate_income_tax(
    annual_income: Decimal,
    config: JurisdictionConfig = JURISDICTION,
) -> dict[str, Any]:
    """Calculate NZ income tax with per-bracket breakdown.

    Args:
        annual_income: Gross annual income (must be >= 0).
        config: Jurisdiction table to apply.

    Returns:
        Dict with total_tax, effective_rate, breakdown, tax_year.
    """
    check_non_negative("Annual income", annual_income)

    breakdown: list[dict[str, Any]] = []
    for bracket in config.brackets:
        if annual_income <= bracket.lower:
            break

        upper = bracket.upper if bracket.upper is not None else annual_income
        taxable = min(annual_income, upper) - bracket.lower

        breakdown.append({
            "lower": float(bracket.lower),
            "upper": float(bracket.upper) if bracket.upper is not None else None,
            "rate": float(bracket.rate),
            "taxable_amount": float(taxable),
            "tax": float(taxable * bracket.rate),
        })

    total_tax = calculate_paye(annual_income, config)
    effective_rate = (total_tax / annual_income * 100) if annual_income > 0 else Decimal("0")

    return {
        "annual_income": float(annual_income),
        "total_tax": float(total_tax),
        "effective_rate": float(round(effective_rate, 2)),
        "breakdown": breakdown,
        "tax_year": config.tax_year,
    }
