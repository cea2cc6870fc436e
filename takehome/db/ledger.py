"""Weekly income/expense ledger stored in the transactions table."""

import logging
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

import asyncpg

from takehome.calculators.errors import ValidationError
from takehome.calculators.pay_run import PayRun
from takehome.db.models import Transaction, TransactionIn, WeekLedger

logger = logging.getLogger(__name__)

PAY_RUN_LABEL = "Weekly Pay"
CENT = Decimal("0.01")


def week_bounds(day: date) -> tuple[date, date]:
    """Return the Monday and Sunday of the week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def shift_week(week_start: date, weeks: int) -> date:
    """Move a week start forward (or back, if negative) by whole weeks."""
    return week_start + timedelta(weeks=weeks)


def pay_run_transaction(run: PayRun, day: date, label: str = PAY_RUN_LABEL) -> TransactionIn:
    """Turn a pay run's money in hand into an income entry, rounded to the cent.

    Raises:
        ValidationError: if the run leaves nothing to record.
    """
    amount = run.grand_total.quantize(CENT, rounding=ROUND_HALF_UP)
    if amount <= 0:
        raise ValidationError(f"Pay run total must be positive to record, got {amount}.")
    return TransactionIn(amount=amount, type="income", date=day, label=label)


def _to_transaction(row: asyncpg.Record) -> Transaction:
    return Transaction(
        id=row["id"],
        amount=row["amount"],
        type=row["type"],
        date=row["date"],
        label=row["label"],
    )


async def add_transaction(pool: asyncpg.Pool, txn: TransactionIn) -> Transaction:
    """Insert a transaction and return it with its new ID."""
    async with pool.acquire() as conn:
        row = await conn.fetchrow(
            """
            INSERT INTO transactions (amount, type, date, label)
            VALUES ($1, $2, $3, $4)
            RETURNING id, amount, type, date, label
            """,
            txn.amount,
            txn.type,
            txn.date,
            txn.label,
        )
    logger.info("Added %s of %s on %s", txn.type, txn.amount, txn.date)
    return _to_transaction(row)


async def update_transaction(pool: asyncpg.Pool, txn_id: UUID, txn: TransactionIn) -> bool:
    """Replace a transaction's fields. Returns True if the row was found."""
    async with pool.acquire() as conn:
        result = await conn.execute(
            """
            UPDATE transactions
            SET amount = $2, type = $3, date = $4, label = $5
            WHERE id = $1
            """,
            txn_id,
            txn.amount,
            txn.type,
            txn.date,
            txn.label,
        )
    return result == "UPDATE 1"


async def delete_transaction(pool: asyncpg.Pool, txn_id: UUID) -> bool:
    """Delete a transaction. Returns True if the row was found."""
    async with pool.acquire() as conn:
        result = await conn.execute("DELETE FROM transactions WHERE id = $1", txn_id)
    return result == "DELETE 1"


async def get_balance(pool: asyncpg.Pool) -> Decimal:
    """All-time balance: every income minus every expense."""
    async with pool.acquire() as conn:
        balance = await conn.fetchval(
            """
            SELECT COALESCE(SUM(CASE WHEN type = 'income' THEN amount ELSE -amount END), 0)
            FROM transactions
            """
        )
    return Decimal(balance)


async def list_week(pool: asyncpg.Pool, day: date) -> WeekLedger:
    """Transactions in the Monday-to-Sunday week containing ``day``, newest first."""
    start, end = week_bounds(day)
    async with pool.acquire() as conn:
        rows = await conn.fetch(
            """
            SELECT id, amount, type, date, label
            FROM transactions
            WHERE date BETWEEN $1 AND $2
            ORDER BY date DESC, created_at DESC
            """,
            start,
            end,
        )

    transactions = [_to_transaction(r) for r in rows]
    income = sum((t.amount for t in transactions if t.type == "income"), Decimal("0"))
    expense = sum((t.amount for t in transactions if t.type == "expense"), Decimal("0"))

    return WeekLedger(
        week_start=start,
        week_end=end,
        transactions=transactions,
        week_income=income,
        week_expense=expense,
        balance=await get_balance(pool),
    )
