"""asyncpg connection pool for the ledger and preferences store."""

import logging

import asyncpg

from config.settings import settings

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


async def get_pool() -> asyncpg.Pool:
    """Get or create the connection pool."""
    global _pool
    if _pool is None:
        db_url = settings.database_url_sync  # asyncpg uses plain postgresql:// URLs
        logger.info("Creating connection pool...")
        _pool = await asyncpg.create_pool(db_url, min_size=1, max_size=5)
    return _pool


async def close_pool() -> None:
    """Close the connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
