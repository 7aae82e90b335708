"""
Integration tests for the partial update write path against SQLite.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import threading
from typing import Any

import pytest

from src.api.error_handlers import BadRequestError, ConflictError, NoFieldsToUpdateError, NotFoundError
from src.api.services.category_service import CategoryService
from src.api.services.course_content_service import CourseSectionService
from src.api.services.course_service import CourseService
from src.api.services.enrollment_service import EnrollmentService
from tests.integration.support import Marketplace

MISSING_ID = "00000000-0000-4000-8000-000000000000"


def create_section(marketplace: Marketplace, **overrides: Any) -> dict[str, Any]:
    payload = {
        "course_id": marketplace.course["id"],
        "title": "Getting started",
        "description": "Setup and tooling",
        "sort_order": 1,
    }
    payload.update(overrides)
    return marketplace.service(CourseSectionService).create_section(payload)


def test_single_field_update_leaves_other_columns_unchanged(marketplace: Marketplace) -> None:
    sections = marketplace.service(CourseSectionService)
    before = create_section(marketplace)

    after = sections.update_section(before["id"], {"sort_order": 5})

    assert after["sort_order"] == 5
    assert after["title"] == before["title"]
    assert after["description"] == before["description"]
    assert after["course_id"] == before["course_id"]
    assert after["created_at"] == before["created_at"]
    assert str(after["updated_at"]) >= str(before["updated_at"])


def test_category_sort_order_update_keeps_name_and_slug(marketplace: Marketplace) -> None:
    categories = marketplace.service(CategoryService)
    before = categories.create_category({"name": "A", "slug": "a", "sort_order": 1})

    after = categories.update_category(before["id"], {"sort_order": 5})

    assert (after["name"], after["slug"], after["sort_order"]) == ("A", "a", 5)
    assert after["description"] == before["description"]
    assert after["is_active"] == before["is_active"]
    assert after["created_at"] == before["created_at"]


def test_foreign_keys_are_enforced_on_sqlite(marketplace: Marketplace) -> None:
    assert marketplace.db.fetch_scalar("PRAGMA foreign_keys") == 1

    with pytest.raises(BadRequestError, match="Request violates a data constraint"):
        marketplace.service(EnrollmentService).insert(
            {"user_id": MISSING_ID, "course_id": marketplace.course["id"]}
        )


def test_none_values_do_not_clear_columns(marketplace: Marketplace) -> None:
    sections = marketplace.service(CourseSectionService)
    section = create_section(marketplace)

    updated = sections.update_section(section["id"], {"title": "Renamed", "description": None})

    assert updated["title"] == "Renamed"
    assert updated["description"] == "Setup and tooling"


def test_update_without_fields_raises_and_writes_nothing(marketplace: Marketplace) -> None:
    sections = marketplace.service(CourseSectionService)
    section = create_section(marketplace)

    with pytest.raises(NoFieldsToUpdateError):
        sections.update_section(section["id"], {"title": None})

    assert sections.get(section["id"]) == section


def test_repeated_update_is_idempotent(marketplace: Marketplace) -> None:
    courses = marketplace.service(CourseService)
    changes = {"title": "SQL for Analysts", "price": 24.5}

    first = courses.update_course(marketplace.course["id"], changes)
    second = courses.update_course(marketplace.course["id"], changes)

    for key in ("title", "price", "slug", "status", "rating", "total_students"):
        assert first[key] == second[key]
    assert second["price"] == 24.5


def test_unknown_record_raises_not_found(marketplace: Marketplace) -> None:
    with pytest.raises(NotFoundError, match="Course section not found"):
        marketplace.service(CourseSectionService).update_section(MISSING_ID, {"title": "x"})


def test_unique_violation_on_update_names_field(marketplace: Marketplace) -> None:
    categories = marketplace.service(CategoryService)
    other = categories.create_category({"name": "Design", "slug": "design"})

    with pytest.raises(ConflictError) as excinfo:
        categories.update_category(other["id"], {"slug": "data"})

    assert excinfo.value.fields == ("slug",)
    assert excinfo.value.message == "Category slug already exists"
    assert categories.get(other["id"])["slug"] == "design"


def test_concurrent_updates_to_different_fields_both_land(marketplace: Marketplace) -> None:
    sections = marketplace.service(CourseSectionService)
    section = create_section(marketplace)
    barrier = threading.Barrier(2)
    errors: list[Exception] = []

    def run(changes: dict[str, Any]) -> None:
        barrier.wait()
        try:
            sections.update_section(section["id"], changes)
        except Exception as exc:
            errors.append(exc)

    threads = [
        threading.Thread(target=run, args=({"title": "Concurrent title"},)),
        threading.Thread(target=run, args=({"sort_order": 9},)),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    final = sections.get(section["id"])
    assert final["title"] == "Concurrent title"
    assert final["sort_order"] == 9


def test_empty_enrollment_update_touches_last_accessed(marketplace: Marketplace) -> None:
    student = marketplace.add_student("grace")
    enrollment = marketplace.enroll(student["id"])
    assert enrollment["last_accessed_at"] is None

    touched = marketplace.service(EnrollmentService).update_enrollment(enrollment["id"], {})

    assert touched["last_accessed_at"] is not None
    assert touched["progress_percentage"] == enrollment["progress_percentage"]
