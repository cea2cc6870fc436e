"""Key/value store for calculator preferences."""

import logging

import asyncpg

from takehome.db.models import Preferences

logger = logging.getLogger(__name__)


async def load_preferences(pool: asyncpg.Pool) -> Preferences:
    """Read stored preferences. Keys never saved fall back to their defaults."""
    async with pool.acquire() as conn:
        rows = await conn.fetch("SELECT key, value FROM user_preferences")

    stored = {r["key"]: r["value"] for r in rows if r["key"] in Preferences.model_fields}
    return Preferences.model_validate(stored)


async def save_preferences(pool: asyncpg.Pool, prefs: Preferences) -> None:
    """Upsert every preference as a text value."""
    values = [(key, str(value)) for key, value in prefs.model_dump().items()]
    async with pool.acquire() as conn:
        await conn.executemany(
            """
            INSERT INTO user_preferences (key, value, updated_at)
            VALUES ($1, $2, NOW())
            ON CONFLICT (key) DO UPDATE SET
                value = EXCLUDED.value,
                updated_at = NOW()
            """,
            values,
        )
    logger.info("Saved %d preferences", len(values))
