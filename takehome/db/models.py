"""Pydantic models for ledger rows and stored preferences."""

import datetime
from decimal import Decimal
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

TransactionType = Literal["income", "expense"]
Theme = Literal["system", "light", "dark"]

# Stored and validated as Decimal; rendered as a number in JSON like the calculator responses.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# --- Ledger ---


class TransactionIn(BaseModel):
    """A transaction as entered by the user."""

    amount: Money = Field(gt=0)
    type: TransactionType
    date: datetime.date
    label: str = "Untitled"


class Transaction(TransactionIn):
    """A stored transaction (maps to the transactions table)."""

    id: UUID


class WeekLedger(BaseModel):
    """Transactions for one Monday-to-Sunday week plus the all-time balance."""

    week_start: datetime.date
    week_end: datetime.date
    transactions: list[Transaction]
    week_income: Money
    week_expense: Money
    balance: Money


# --- Preferences ---


class Preferences(BaseModel):
    """Calculator inputs remembered between visits."""

    hourly_rate: Money = Field(default=Decimal("0"), ge=0)
    base_weekly_benefit: Money = Field(default=Decimal("401"), ge=0)
    theme: Theme = "system"
