"""Apply Alembic migrations to the configured database."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from threadboard.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def build_config(database_url: str | None = None) -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url_sync)
    return cfg


def run_upgrade(revision: str = "head", database_url: str | None = None) -> None:
    """Upgrade the database schema to `revision`."""
    logger.info("Upgrading database schema to %s", revision)
    command.upgrade(build_config(database_url), revision)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Apply Threadboard database migrations.")
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument("--database-url", default=None)
    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper())
    run_upgrade(args.revision, args.database_url)


if __name__ == "__main__":
    main()
