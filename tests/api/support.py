# This file provides shared helpers for API endpoint tests.
# It exists so tests can override service dependencies without touching real databases.
# The helpers build consistent config objects and scoped TestClient contexts.
# Centralized test wiring keeps API tests small and focused on behavior.

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from src.api.api_config import ApiConfig
from src.api.app import app
from src.api.dependencies import (
    get_announcement_service,
    get_answer_service,
    get_category_service,
    get_config,
    get_coupon_service,
    get_course_service,
    get_database_client,
    get_enrollment_service,
    get_instructor_profile_service,
    get_lecture_service,
    get_notification_service,
    get_progress_service,
    get_question_service,
    get_review_service,
    get_section_service,
    get_tag_service,
    get_user_service,
    get_wishlist_service,
)
from src.api.routers.health import READINESS_TABLES

SERVICE_DEPENDENCIES: dict[str, Callable[[], Any]] = {
    "category_service": get_category_service,
    "tag_service": get_tag_service,
    "user_service": get_user_service,
    "profile_service": get_instructor_profile_service,
    "course_service": get_course_service,
    "section_service": get_section_service,
    "lecture_service": get_lecture_service,
    "enrollment_service": get_enrollment_service,
    "progress_service": get_progress_service,
    "review_service": get_review_service,
    "question_service": get_question_service,
    "answer_service": get_answer_service,
    "coupon_service": get_coupon_service,
    "announcement_service": get_announcement_service,
    "notification_service": get_notification_service,
    "wishlist_service": get_wishlist_service,
}

COURSE_ID = "2f1c7a34-5b3e-4d7a-9f0e-6c1d2b3a4e5f"
USER_ID = "8d3e9c21-7a4b-4f6e-8c2d-1b0a9e8f7d6c"
NOW = "2026-01-15T10:00:00+00:00"


def build_test_config() -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Course API",
        api_version_path="/api/v1",
        schema_version="1.0.0",
        host="0.0.0.0",
        port=8000,
        environment="test",
        database_url="sqlite+pysqlite:///:memory:",
        default_page_size=2,
        max_page_size=5,
        enable_request_logging=False,
        allowed_origins=[],
        request_log_table_name="api_request_log",
        app_version="0.1.0",
    )


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = set(READINESS_TABLES) if existing_tables is None else existing_tables

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables

    def log_request(self, **_: Any) -> None:
        return None


def course_row(**overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": COURSE_ID,
        "title": "Intro to SQL",
        "slug": "intro-to-sql",
        "description": None,
        "short_description": None,
        "thumbnail_url": None,
        "preview_video_url": None,
        "instructor_id": USER_ID,
        "category_id": "0a1b2c3d-4e5f-4a6b-8c7d-9e0f1a2b3c4d",
        "price": 19.99,
        "discount_price": None,
        "language": "English",
        "level": "beginner",
        "duration_hours": 0,
        "total_lectures": 0,
        "status": "draft",
        "requirements": [],
        "what_you_learn": [],
        "target_audience": [],
        "rating": 0.0,
        "total_students": 0,
        "total_reviews": 0,
        "published_at": None,
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


def _provide(value: Any) -> Callable[[], Any]:
    # A zero-argument provider; a keyword default would be treated by FastAPI as a query parameter.
    def provider() -> Any:
        return value

    return provider


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    **services: Any,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides.

    Services are passed by keyword using the names in SERVICE_DEPENDENCIES.
    """

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client
    for name, service in services.items():
        app.dependency_overrides[SERVICE_DEPENDENCIES[name]] = _provide(service)

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
