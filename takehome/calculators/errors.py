"""Exceptions raised by the tax/benefit engine, plus the boundary checks that raise them."""

from decimal import Decimal


class ValidationError(ValueError):
    """An input is outside the engine's domain (negative money, bad rate, negative hours)."""


class ConfigurationError(Exception):
    """The jurisdiction table is malformed. Raised at load time, never per call."""


def check_non_negative(name: str, value: Decimal | int) -> None:
    """Raise ValidationError if a money amount or count is below zero."""
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}.")


def check_ratio(name: str, value: Decimal) -> None:
    """Raise ValidationError if a rate falls outside [0, 1]."""
    if not 0 <= value <= 1:
        raise ValidationError(f"{name} must be between 0 and 1, got {value}.")
