#!/usr/bin/env python3
"""Apply the document store schema with Logfire error tracking.

Usage:
    python scripts/run_migrations.py [revision]

The revision defaults to "head".
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from forum.config import Settings
from forum.util.error import ConfigurationError
from forum.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the documents table schema and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)
    revision = argv[0] if argv else "head"

    try:
        if not settings.database.url:
            raise ConfigurationError("DATABASE__URL must be configured")

        logfire.info(
            "Upgrading document store schema",
            environment=settings.environment,
            revision=revision,
        )
        command.upgrade(Config("alembic.ini"), revision)
        logfire.info("Document store schema is up to date", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Schema upgrade failed",
            revision=revision,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail the deploy rather than serve votes against a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
