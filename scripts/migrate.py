"""Apply (or roll back) ledger database migrations using yoyo-migrations."""

import argparse
import logging
import sys
from pathlib import Path

from yoyo import get_backend, read_migrations

# Add project root to path so config is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def main() -> None:
    """Apply all pending migrations, or roll back the latest with --rollback."""
    parser = argparse.ArgumentParser(description="Ledger schema migrations")
    parser.add_argument(
        "--rollback", action="store_true",
        help="Roll back the most recently applied migration",
    )
    args = parser.parse_args()

    logger.info("Connecting to database...")
    backend = get_backend(settings.database_url_sync)
    migrations = read_migrations(str(MIGRATIONS_DIR))

    with backend.lock():
        if args.rollback:
            applied = backend.to_rollback(migrations)
            if not applied:
                logger.info("Nothing to roll back.")
                return
            logger.info("Rolling back %s...", applied[0].id)
            backend.rollback_migrations(applied[:1])
            return

        to_apply = backend.to_apply(migrations)
        if not to_apply:
            logger.info("No pending migrations.")
            return

        logger.info("Applying %d migration(s)...", len(to_apply))
        backend.apply_migrations(to_apply)
        logger.info("Migrations applied successfully.")


if __name__ == "__main__":
    main()
