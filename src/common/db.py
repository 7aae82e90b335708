"""
Database connection utilities for maintenance scripts.
The API builds its own pooled client in `src.api.db_access`; scripts share this lazily created engine.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from src.common.settings import get_settings


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Create the script engine from `DATABASE_URL` on first use."""

    settings = get_settings()
    return create_engine(settings.DATABASE_URL, pool_pre_ping=True, future=True)


def test_connection() -> bool:
    """Return True if the database can be reached and queried."""

    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
