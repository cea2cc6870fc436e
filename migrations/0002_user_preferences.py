"""Create user_preferences key/value table."""

from yoyo import step

__depends__ = {"0001_transactions"}

steps = [
    step(
        """
        CREATE TABLE user_preferences (
            key             TEXT PRIMARY KEY,
            value           TEXT NOT NULL,
            updated_at      TIMESTAMPTZ DEFAULT NOW()
        )
        """,
        "DROP TABLE IF EXISTS user_preferences",
    ),
]
