"""Tests for loading and validating the jurisdiction table."""

import copy
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
import yaml

from takehome.calculators.errors import ConfigurationError
from takehome.calculators.tax_data import JURISDICTION, build_jurisdiction, load_jurisdiction

_VALID: dict[str, Any] = {
    "brackets": [
        {"upper": 15600, "rate": "0.105"},
        {"upper": 53500, "rate": "0.175"},
        {"upper": 78100, "rate": "0.30"},
        {"upper": 180000, "rate": "0.33"},
        {"upper": None, "rate": "0.39"},
    ],
    "acc": {"rate": "0.016", "max_liable_earnings": 142283},
    "student_loan": {"weekly_threshold": 465, "repayment_rate": "0.12"},
    "abatement": {"free_zone_weekly": 160, "reduction_rate": "0.70"},
    "holiday_loading_rate": "0.08",
}


def _raw(**overrides: Any) -> dict[str, Any]:
    raw = copy.deepcopy(_VALID)
    raw.update(overrides)
    return raw


class TestBundledTable:
    def test_brackets_are_contiguous(self) -> None:
        lower = Decimal("0")
        for bracket in JURISDICTION.brackets:
            assert bracket.lower == lower
            lower = bracket.upper
        assert JURISDICTION.brackets[-1].upper is None

    def test_constants(self) -> None:
        assert JURISDICTION.tax_year == "2024-25"
        assert JURISDICTION.acc.rate == Decimal("0.016")
        assert JURISDICTION.acc.max_liable_earnings == Decimal("142283")
        assert JURISDICTION.student_loan.weekly_threshold == Decimal("465")
        assert JURISDICTION.abatement.free_zone_weekly == Decimal("160")
        assert JURISDICTION.abatement.reduction_rate == Decimal("0.70")
        assert JURISDICTION.holiday_loading_rate == Decimal("0.08")

    def test_unknown_year(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown tax year"):
            load_jurisdiction("2099-00")


class TestBuildJurisdiction:
    def test_valid(self) -> None:
        config = build_jurisdiction("test", _raw())
        assert len(config.brackets) == 5
        assert config.brackets[1].lower == Decimal("15600")
        assert config.brackets[1].rate == Decimal("0.175")

    def test_missing_terminal_bracket(self) -> None:
        raw = _raw(brackets=_VALID["brackets"][:-1])
        with pytest.raises(ConfigurationError, match="unbounded"):
            build_jurisdiction("test", raw)

    def test_bracket_after_unbounded(self) -> None:
        raw = _raw(brackets=[{"upper": None, "rate": "0.1"}, {"upper": 50000, "rate": "0.2"}])
        with pytest.raises(ConfigurationError, match="follows"):
            build_jurisdiction("test", raw)

    def test_non_monotonic_bounds(self) -> None:
        raw = _raw(brackets=[
            {"upper": 50000, "rate": "0.1"},
            {"upper": 40000, "rate": "0.2"},
            {"upper": None, "rate": "0.3"},
        ])
        with pytest.raises(ConfigurationError, match="must exceed"):
            build_jurisdiction("test", raw)

    def test_decreasing_rate(self) -> None:
        raw = _raw(brackets=[{"upper": 50000, "rate": "0.3"}, {"upper": None, "rate": "0.2"}])
        with pytest.raises(ConfigurationError, match="below the previous"):
            build_jurisdiction("test", raw)

    def test_rate_of_one_rejected(self) -> None:
        raw = _raw(brackets=[{"upper": None, "rate": "1"}])
        with pytest.raises(ConfigurationError):
            build_jurisdiction("test", raw)

    def test_empty_brackets(self) -> None:
        with pytest.raises(ConfigurationError, match="empty"):
            build_jurisdiction("test", _raw(brackets=[]))

    def test_negative_cap(self) -> None:
        raw = _raw(acc={"rate": "0.016", "max_liable_earnings": -1})
        with pytest.raises(ConfigurationError, match="non-negative"):
            build_jurisdiction("test", raw)

    def test_abatement_rate_out_of_range(self) -> None:
        raw = _raw(abatement={"free_zone_weekly": 160, "reduction_rate": "1.5"})
        with pytest.raises(ConfigurationError):
            build_jurisdiction("test", raw)

    def test_missing_section(self) -> None:
        raw = _raw()
        del raw["student_loan"]
        with pytest.raises(ConfigurationError, match="student_loan"):
            build_jurisdiction("test", raw)

    def test_not_a_number(self) -> None:
        raw = _raw(student_loan={"weekly_threshold": "lots", "repayment_rate": "0.12"})
        with pytest.raises(ConfigurationError, match="not a number"):
            build_jurisdiction("test", raw)


def test_load_from_absolute_path(tmp_path: Path) -> None:
    """An absolute path outside config/ is read as-is."""
    path = tmp_path / "custom.yaml"
    path.write_text(yaml.safe_dump({"custom": _raw()}))
    config = load_jurisdiction("custom", path)
    assert config.tax_year == "custom"
    assert config.abatement.free_zone_weekly == Decimal("160")
