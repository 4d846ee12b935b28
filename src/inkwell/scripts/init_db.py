"""Create (or recreate) the Inkwell tables on the configured database."""
from __future__ import annotations

import argparse
import logging

from inkwell.core.settings import settings
from inkwell.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Initialize the Inkwell database schema")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop all tables before creating them again.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    if args.drop:
        drop_tables()
        logger.info("Dropped all tables")
    create_tables()
    logger.info("Database initialized at %s", settings.effective_database_url)


if __name__ == "__main__":
    main()
