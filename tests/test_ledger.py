"""Tests for the ledger and preferences store against a mocked asyncpg pool."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

from takehome.calculators.errors import ValidationError
from takehome.calculators.pay_run import calculate_pay_run
from takehome.calculators.paye import PaySettings
from takehome.db.ledger import (
    add_transaction,
    delete_transaction,
    get_balance,
    list_week,
    pay_run_transaction,
    shift_week,
    update_transaction,
    week_bounds,
)
from takehome.db.models import Preferences, TransactionIn
from takehome.db.preferences import load_preferences, save_preferences


def _make_row(
    amount: str = "50.00",
    type: str = "income",
    day: date = date(2025, 6, 4),
    label: str = "Weekly Pay",
    txn_id: UUID | None = None,
) -> dict[str, Any]:
    """Build a dict matching an asyncpg Record from the transactions table."""
    return {
        "id": txn_id or uuid4(),
        "amount": Decimal(amount),
        "type": type,
        "date": day,
        "label": label,
    }


# --- Week arithmetic ---


def test_week_bounds_midweek() -> None:
    """Wednesday 4 June 2025 sits in the week of Monday 2 June."""
    assert week_bounds(date(2025, 6, 4)) == (date(2025, 6, 2), date(2025, 6, 8))


def test_week_bounds_sunday_belongs_to_previous_monday() -> None:
    assert week_bounds(date(2025, 6, 8)) == (date(2025, 6, 2), date(2025, 6, 8))


def test_week_bounds_monday() -> None:
    assert week_bounds(date(2025, 6, 9))[0] == date(2025, 6, 9)


def test_shift_week() -> None:
    assert shift_week(date(2025, 6, 2), 1) == date(2025, 6, 9)
    assert shift_week(date(2025, 6, 2), -2) == date(2025, 5, 19)


# --- Transactions ---


@pytest.mark.asyncio
async def test_add_transaction(mock_db_pool: MagicMock, mock_conn: AsyncMock) -> None:
    txn_id = uuid4()
    mock_conn.fetchrow.return_value = _make_row(amount="989.50", txn_id=txn_id)

    txn = TransactionIn(amount=Decimal("989.50"), type="income", date=date(2025, 6, 4), label="Weekly Pay")
    stored = await add_transaction(mock_db_pool, txn)

    assert stored.id == txn_id
    assert stored.amount == Decimal("989.50")
    args = mock_conn.fetchrow.call_args.args
    assert "INSERT INTO transactions" in args[0]
    assert args[1:] == (Decimal("989.50"), "income", date(2025, 6, 4), "Weekly Pay")


@pytest.mark.asyncio
async def test_update_transaction_found(mock_db_pool: MagicMock, mock_conn: AsyncMock) -> None:
    mock_conn.execute.return_value = "UPDATE 1"
    txn = TransactionIn(amount=Decimal("12"), type="expense", date=date(2025, 6, 5))
    assert await update_transaction(mock_db_pool, uuid4(), txn) is True


@pytest.mark.asyncio
async def test_update_transaction_missing(mock_db_pool: MagicMock, mock_conn: AsyncMock) -> None:
    mock_conn.execute.return_value = "UPDATE 0"
    txn = TransactionIn(amount=Decimal("12"), type="expense", date=date(2025, 6, 5))
    assert await update_transaction(mock_db_pool, uuid4(), txn) is False


@pytest.mark.asyncio
async def test_delete_transaction(mock_db_pool: MagicMock, mock_conn: AsyncMock) -> None:
    mock_conn.execute.return_value = "DELETE 1"
    txn_id = uuid4()
    assert await delete_transaction(mock_db_pool, txn_id) is True
    assert mock_conn.execute.call_args.args[1] == txn_id

    mock_conn.execute.return_value = "DELETE 0"
    assert await delete_transaction(mock_db_pool, txn_id) is False


@pytest.mark.asyncio
async def test_get_balance(mock_db_pool: MagicMock, mock_conn: AsyncMock) -> None:
    mock_conn.fetchval.return_value = Decimal("-20.50")
    assert await get_balance(mock_db_pool) == Decimal("-20.50")


@pytest.mark.asyncio
async def test_list_week(mock_db_pool: MagicMock, mock_conn: AsyncMock) -> None:
    mock_conn.fetch.return_value = [
        _make_row(amount="30.00", type="expense", day=date(2025, 6, 6), label="Groceries"),
        _make_row(amount="989.50", type="income", day=date(2025, 6, 4)),
    ]
    mock_conn.fetchval.return_value = Decimal("1200.00")

    ledger = await list_week(mock_db_pool, date(2025, 6, 4))

    assert ledger.week_start == date(2025, 6, 2)
    assert ledger.week_end == date(2025, 6, 8)
    assert [t.label for t in ledger.transactions] == ["Groceries", "Weekly Pay"]
    assert ledger.week_income == Decimal("989.50")
    assert ledger.week_expense == Decimal("30.00")
    assert ledger.balance == Decimal("1200.00")
    assert mock_conn.fetch.call_args.args[1:] == (date(2025, 6, 2), date(2025, 6, 8))


@pytest.mark.asyncio
async def test_list_week_empty(mock_db_pool: MagicMock) -> None:
    ledger = await list_week(mock_db_pool, date(2025, 6, 4))
    assert ledger.transactions == []
    assert ledger.week_income == 0
    assert ledger.balance == 0


def test_transaction_amount_must_be_positive() -> None:
    with pytest.raises(ValueError):
        TransactionIn(amount=Decimal("0"), type="income", date=date(2025, 6, 4))


def test_money_renders_as_json_number() -> None:
    txn = TransactionIn(amount=Decimal("12.50"), type="expense", date=date(2025, 6, 4))
    assert txn.model_dump()["amount"] == Decimal("12.50")
    assert txn.model_dump(mode="json")["amount"] == 12.5


# --- Pay run entries ---


def test_pay_run_transaction(beneficiary: PaySettings) -> None:
    """20h then 0h at $25 on a $401 benefit leaves 989.50 in hand."""
    run = calculate_pay_run(Decimal("25"), [Decimal("20"), Decimal("0")], beneficiary)
    txn = pay_run_transaction(run, date(2025, 6, 6))
    assert txn == TransactionIn(
        amount=Decimal("989.50"), type="income", date=date(2025, 6, 6), label="Weekly Pay"
    )


def test_pay_run_transaction_rounds_to_cents(no_extras: PaySettings) -> None:
    run = calculate_pay_run(Decimal("23.15"), [Decimal("7")], no_extras)
    txn = pay_run_transaction(run, date(2025, 6, 6), label="Casual shift")
    assert txn.amount == run.grand_total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    assert txn.amount.as_tuple().exponent == -2
    assert txn.label == "Casual shift"


def test_pay_run_transaction_nothing_to_record(no_extras: PaySettings) -> None:
    run = calculate_pay_run(Decimal("25"), [Decimal("0")], no_extras)
    with pytest.raises(ValidationError, match="positive"):
        pay_run_transaction(run, date(2025, 6, 6))


# --- Preferences ---


@pytest.mark.asyncio
async def test_load_preferences_defaults(mock_db_pool: MagicMock) -> None:
    prefs = await load_preferences(mock_db_pool)
    assert prefs == Preferences()
    assert prefs.base_weekly_benefit == Decimal("401")


@pytest.mark.asyncio
async def test_load_preferences_stored(mock_db_pool: MagicMock, mock_conn: AsyncMock) -> None:
    mock_conn.fetch.return_value = [
        {"key": "hourly_rate", "value": "23.50"},
        {"key": "theme", "value": "dark"},
        {"key": "retired_key", "value": "ignored"},
    ]
    prefs = await load_preferences(mock_db_pool)
    assert prefs.hourly_rate == Decimal("23.50")
    assert prefs.theme == "dark"
    assert prefs.base_weekly_benefit == Decimal("401")


@pytest.mark.asyncio
async def test_save_preferences(mock_db_pool: MagicMock, mock_conn: AsyncMock) -> None:
    await save_preferences(mock_db_pool, Preferences(hourly_rate=Decimal("25"), theme="light"))

    sql, values = mock_conn.executemany.call_args.args
    assert "ON CONFLICT (key)" in sql
    assert ("hourly_rate", "25") in values
    assert ("theme", "light") in values
    assert ("base_weekly_benefit", "401") in values
