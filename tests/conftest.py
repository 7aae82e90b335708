"""
Shared test configuration.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_ENV_DEFAULTS = {
    "PROJECT_NAME": "test-project",
    "ENV": "test",
    "LOG_LEVEL": "INFO",
    "DATABASE_URL": "sqlite+pysqlite:///:memory:",
    "API_HOST": "0.0.0.0",
    "API_PORT": "8000",
}

# The app module builds its config at import time, before fixtures run.
for _key, _value in TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _value)


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    for key, value in TEST_ENV_DEFAULTS.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)


@pytest.fixture
def sqlite_db(tmp_path: Path):
    """A DatabaseClient bound to a throwaway SQLite file with the full schema applied."""

    from src.api.db_access import DatabaseClient
    from src.common.ddl import apply_schema_ddl

    client = DatabaseClient(database_url=f"sqlite+pysqlite:///{tmp_path / 'marketplace.db'}")
    apply_schema_ddl(client.engine)
    yield client
    client.engine.dispose()


@pytest.fixture
def marketplace(sqlite_db):
    """One instructor, one category, and one published course seeded through the services."""

    from tests.integration.support import seed_marketplace

    return seed_marketplace(sqlite_db)
