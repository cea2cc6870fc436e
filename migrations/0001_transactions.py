"""Create transactions table for the weekly income/expense ledger."""

from yoyo import step

steps = [
    step(
        """
        CREATE TABLE transactions (
            id              UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            amount          NUMERIC(12,2) NOT NULL CHECK (amount > 0),
            type            TEXT NOT NULL CHECK (type IN ('income', 'expense')),
            date            DATE NOT NULL,
            label           TEXT NOT NULL DEFAULT 'Untitled',
            created_at      TIMESTAMPTZ DEFAULT NOW()
        )
        """,
        "DROP TABLE IF EXISTS transactions",
    ),
    step(
        "CREATE INDEX idx_transactions_date ON transactions (date DESC)",
        "DROP INDEX IF EXISTS idx_transactions_date",
    ),
]
