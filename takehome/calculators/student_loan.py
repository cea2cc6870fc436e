"""Student loan repayment calculator."""

from decimal import Decimal

from takehome.calculators.errors import check_non_negative
from takehome.calculators.tax_data import JURISDICTION, JurisdictionConfig


def calculate_student_loan_repayment(
    weekly_gross: Decimal,
    config: JurisdictionConfig = JURISDICTION,
) -> Decimal:
    """Calculate the weekly student loan deduction.

    Repayment is charged at 12% on pay above the weekly threshold.
    """
    check_non_negative("Weekly gross", weekly_gross)

    sl = config.student_loan
    if weekly_gross <= sl.weekly_threshold:
        return Decimal("0")
    return (weekly_gross - sl.weekly_threshold) * sl.repayment_rate
