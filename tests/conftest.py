"""Shared test fixtures."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from takehome.calculators.paye import PaySettings


@pytest.fixture
def no_extras() -> PaySettings:
    """No holiday pay, student loan or KiwiSaver; no benefit."""
    return PaySettings()


@pytest.fixture
def beneficiary() -> PaySettings:
    """A worker on a $401/week main benefit with no optional deductions."""
    return PaySettings(base_weekly_benefit=Decimal("401"))


# --- Mock factories for store / API tests ---


@pytest.fixture
def mock_conn() -> AsyncMock:
    """Async mock of an asyncpg connection with empty-table defaults."""
    conn = AsyncMock()
    conn.fetch.return_value = []
    conn.fetchval.return_value = Decimal("0")
    conn.execute.return_value = "UPDATE 1"
    return conn


@pytest.fixture
def mock_db_pool(mock_conn: AsyncMock) -> MagicMock:
    """Mock of asyncpg.Pool with context-managed acquire().

    asyncpg.Pool.acquire() returns an async context manager (not a coroutine),
    so we use MagicMock for the pool and configure __aenter__/__aexit__ manually.
    """
    acm = MagicMock()
    acm.__aenter__ = AsyncMock(return_value=mock_conn)
    acm.__aexit__ = AsyncMock(return_value=False)

    pool = MagicMock()
    pool.acquire.return_value = acm
    return pool
