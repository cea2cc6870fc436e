"""NZ jurisdiction constants — PAYE brackets, ACC levy, student loan, benefit abatement.

The table lives in config/jurisdiction.yaml keyed by tax year. It is read and
checked once at import; every calculator takes the resulting
JurisdictionConfig as an explicit argument, defaulting to JURISDICTION.
"""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, NamedTuple

from config import load_yaml_config
from config.settings import settings
from takehome.calculators.errors import ConfigurationError

logger = logging.getLogger(__name__)


class TaxBracket(NamedTuple):
    """A single income tax bracket."""

    lower: Decimal  # inclusive, equals the previous bracket's upper
    upper: Decimal | None  # None = no cap
    rate: Decimal


class AccLevy(NamedTuple):
    """ACC earner's levy parameters."""

    rate: Decimal
    max_liable_earnings: Decimal


class StudentLoanThreshold(NamedTuple):
    """Student loan repayment parameters, applied per week of pay."""

    weekly_threshold: Decimal
    repayment_rate: Decimal


class BenefitAbatement(NamedTuple):
    """Main-benefit abatement: free zone, then a cents-per-dollar reduction."""

    free_zone_weekly: Decimal
    reduction_rate: Decimal


class JurisdictionConfig(NamedTuple):
    """All parameters the engine needs for one NZ tax year."""

    tax_year: str
    brackets: tuple[TaxBracket, ...]
    acc: AccLevy
    student_loan: StudentLoanThreshold
    abatement: BenefitAbatement
    holiday_loading_rate: Decimal


def _decimal(raw: dict[str, Any], key: str, where: str) -> Decimal:
    if key not in raw or raw[key] is None:
        raise ConfigurationError(f"{where}: missing '{key}'.")
    try:
        return Decimal(str(raw[key]))
    except ArithmeticError as exc:
        raise ConfigurationError(f"{where}: '{key}' is not a number: {raw[key]!r}") from exc


def _rate(raw: dict[str, Any], key: str, where: str) -> Decimal:
    value = _decimal(raw, key, where)
    if not 0 <= value <= 1:
        raise ConfigurationError(f"{where}: '{key}' must be between 0 and 1, got {value}.")
    return value


def _amount(raw: dict[str, Any], key: str, where: str) -> Decimal:
    value = _decimal(raw, key, where)
    if value < 0:
        raise ConfigurationError(f"{where}: '{key}' must be non-negative, got {value}.")
    return value


def _build_brackets(rows: list[dict[str, Any]]) -> tuple[TaxBracket, ...]:
    """Turn ``{upper, rate}`` rows into contiguous brackets covering [0, inf)."""
    if not rows:
        raise ConfigurationError("brackets: table is empty.")

    brackets: list[TaxBracket] = []
    lower = Decimal("0")
    previous_rate = Decimal("0")

    for index, row in enumerate(rows):
        where = f"brackets[{index}]"
        if brackets and brackets[-1].upper is None:
            raise ConfigurationError(f"{where}: follows the unbounded bracket.")

        rate = _decimal(row, "rate", where)
        if not 0 <= rate < 1:
            raise ConfigurationError(f"{where}: rate must be in [0, 1), got {rate}.")
        if rate < previous_rate:
            raise ConfigurationError(f"{where}: rate {rate} is below the previous bracket's {previous_rate}.")

        upper = row.get("upper")
        if upper is None:
            brackets.append(TaxBracket(lower, None, rate))
        else:
            upper = _decimal(row, "upper", where)
            if upper <= lower:
                raise ConfigurationError(f"{where}: upper bound {upper} must exceed {lower}.")
            brackets.append(TaxBracket(lower, upper, rate))
            lower = upper
        previous_rate = rate

    if brackets[-1].upper is not None:
        raise ConfigurationError("brackets: last bracket must be unbounded (upper: null).")

    return tuple(brackets)


def build_jurisdiction(tax_year: str, raw: dict[str, Any]) -> JurisdictionConfig:
    """Validate one year's raw YAML mapping and build the config.

    Raises:
        ConfigurationError: on any missing, out-of-range or non-monotonic value.
    """
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{tax_year}: expected a mapping, got {type(raw).__name__}.")

    for section in ("brackets", "acc", "student_loan", "abatement"):
        if section not in raw:
            raise ConfigurationError(f"{tax_year}: missing '{section}' section.")

    acc, sl, abatement = raw["acc"], raw["student_loan"], raw["abatement"]
    return JurisdictionConfig(
        tax_year=tax_year,
        brackets=_build_brackets(raw["brackets"]),
        acc=AccLevy(
            rate=_rate(acc, "rate", "acc"),
            max_liable_earnings=_amount(acc, "max_liable_earnings", "acc"),
        ),
        student_loan=StudentLoanThreshold(
            weekly_threshold=_amount(sl, "weekly_threshold", "student_loan"),
            repayment_rate=_rate(sl, "repayment_rate", "student_loan"),
        ),
        abatement=BenefitAbatement(
            free_zone_weekly=_amount(abatement, "free_zone_weekly", "abatement"),
            reduction_rate=_rate(abatement, "reduction_rate", "abatement"),
        ),
        holiday_loading_rate=_rate(raw, "holiday_loading_rate", tax_year),
    )


def load_jurisdiction(
    tax_year: str = settings.tax_year,
    filename: str | Path = settings.jurisdiction_file,
) -> JurisdictionConfig:
    """Load and validate the jurisdiction table for ``tax_year``."""
    years = load_yaml_config(filename)
    if tax_year not in years:
        available = ", ".join(sorted(years))
        raise ConfigurationError(f"Unknown tax year: {tax_year}. Available: {available}")

    config = build_jurisdiction(tax_year, years[tax_year])
    logger.info("Loaded jurisdiction table for %s (%d brackets)", tax_year, len(config.brackets))
    return config


JURISDICTION = load_jurisdiction()
