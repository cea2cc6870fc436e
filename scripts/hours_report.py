"""Print the hours sweep as a table: total income, marginal gain and zone per hour.

Usage:
    python scripts/hours_report.py --rate 25 --base-benefit 401
    python scripts/hours_report.py --rate 23.15 --holiday-pay --kiwisaver 0.03 --max-hours 40
"""

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from takehome.analysis.hours_sweep import DEFAULT_MAX_HOURS, HourEvent, SweepResult, sweep
from takehome.calculators.errors import ValidationError
from takehome.calculators.paye import PaySettings
from takehome.calculators.tax_data import JURISDICTION

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

_EVENT_MARKS: dict[HourEvent, str] = {
    HourEvent.NONE: "",
    HourEvent.WARNING: "last sweet hour",
    HourEvent.STAGNATION: "under $2/h",
    HourEvent.FREEDOM: "off benefit",
}


def print_report(result: SweepResult, rate: Decimal) -> None:
    """Log the formatted sweep."""
    logger.info("=" * 70)
    logger.info("HOURS SWEEP at $%s/h (%s)", rate, JURISDICTION.tax_year)
    logger.info("=" * 70)
    logger.info("%5s %10s %10s %10s %10s %9s  %s", "Hours", "Net", "Benefit", "Total", "Marginal", "Zone", "")

    for p in result.points:
        logger.info(
            "%5d %10.2f %10.2f %10.2f %+10.2f %9s  %s",
            p.hours,
            p.net_weekly,
            p.benefit_weekly,
            p.total_weekly,
            p.marginal_delta,
            p.zone.value,
            _EVENT_MARKS[p.event],
        )

    logger.info("-" * 70)
    logger.info("  Sweet zone ends at:  %s", result.sweet_zone_end_hour)
    logger.info("  Dead zone ends at:   %s", result.dead_zone_end_hour)


def main() -> None:
    """Run the hours report."""
    parser = argparse.ArgumentParser(description="Net income vs hours worked")
    parser.add_argument("--rate", type=Decimal, required=True, help="Hourly pay rate")
    parser.add_argument(
        "--base-benefit", type=Decimal, default=Decimal("401"),
        help="Weekly benefit before abatement (default: 401)",
    )
    parser.add_argument("--holiday-pay", action="store_true", help="Add 8%% holiday pay loading")
    parser.add_argument("--student-loan", action="store_true", help="Deduct student loan repayments")
    parser.add_argument(
        "--kiwisaver", type=Decimal, default=None,
        help="KiwiSaver contribution rate, e.g. 0.03",
    )
    parser.add_argument(
        "--max-hours", type=int, default=DEFAULT_MAX_HOURS,
        help=f"Highest hour to evaluate (default: {DEFAULT_MAX_HOURS})",
    )
    args = parser.parse_args()

    pay_settings = PaySettings(
        has_holiday_loading=args.holiday_pay,
        has_student_loan=args.student_loan,
        has_retirement_contribution=args.kiwisaver is not None,
        retirement_rate=args.kiwisaver if args.kiwisaver is not None else Decimal("0"),
        base_weekly_benefit=args.base_benefit,
    )

    try:
        result = sweep(args.rate, pay_settings, args.max_hours)
    except ValidationError as exc:
        parser.error(str(exc))

    if not result.points:
        logger.info("Hourly rate must be above zero; nothing to report.")
        return
    print_report(result, args.rate)


if __name__ == "__main__":
    main()
