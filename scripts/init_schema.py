#!/usr/bin/env python3
"""
Create the course marketplace schema in the configured database.
It applies every DDL file in dependency order inside one transaction and is safe to rerun.
Run it directly, and expect it to print the number of executed statements.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.common.db import get_engine, test_connection
from src.common.ddl import DEFAULT_DDL_DIR, apply_schema_ddl
from src.common.logging import configure_logging

logger = logging.getLogger("init_schema")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply the course marketplace schema DDL")
    parser.add_argument("--ddl-dir", type=Path, default=DEFAULT_DDL_DIR)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()

    if not test_connection():
        logger.error("Database is not reachable; check DATABASE_URL")
        sys.exit(1)

    executed = apply_schema_ddl(get_engine(), args.ddl_dir)
    logger.info("Applied %d schema statements from %s", executed, args.ddl_dir)


if __name__ == "__main__":
    main()
