#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py -1         # step back one revision
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from huddle.config import Settings
from huddle.util.logging import setup_logging
from huddle.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Migrate to the requested revision and log any errors to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    target = argv[0] if argv else "head"
    downgrade = target.startswith("-") or target == "base"

    try:
        logfire.info("Starting database migrations", target=target)

        alembic_cfg = Config("alembic.ini")
        if downgrade:
            command.downgrade(alembic_cfg, target)
        else:
            command.upgrade(alembic_cfg, target)

        logfire.info("Database migrations completed successfully", target=target)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            target=target,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
