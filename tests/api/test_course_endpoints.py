# This file tests course endpoints against a fake service.
# It exists to validate envelopes, ID validation, and partial update request handling.
# The fake records what the router hands to the service so tests can assert on it.

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import OperationalError

from src.api.error_handlers import ConflictError, NoFieldsToUpdateError, NotFoundError
from tests.api.support import COURSE_ID, api_test_client, course_row


class FakeCourseService:
    def __init__(self, *, rows: list[dict[str, Any]] | None = None, error: Exception | None = None) -> None:
        self.rows = rows if rows is not None else [course_row()]
        self.error = error
        self.list_calls: list[dict[str, Any]] = []
        self.update_calls: list[tuple[str, dict[str, Any]]] = []

    def list_courses(self, **kwargs: Any) -> dict[str, Any]:
        self.list_calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return {"rows": self.rows, "total_count": 7}

    def get(self, record_id: str) -> dict[str, Any]:
        if self.error is not None:
            raise self.error
        return course_row(id=record_id)

    def update_course(self, record_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        self.update_calls.append((record_id, changes))
        if self.error is not None:
            raise self.error
        return course_row(id=record_id, **changes)

    def get_review_stats(self, course_id: str) -> dict[str, Any]:
        return {
            "course_id": course_id,
            "total_reviews": 2,
            "average_rating": 3.0,
            "rating_distribution": {"1": 0, "2": 1, "3": 0, "4": 1, "5": 0},
        }


def test_list_courses_returns_paginated_envelope() -> None:
    service = FakeCourseService()
    with api_test_client(course_service=service) as client:
        response = client.get("/api/v1/courses", params={"page": 2, "sort": "price:asc"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["api_version"] == "v1"
    assert payload["pagination"] == {
        "page": 2,
        "limit": 2,
        "total_count": 7,
        "total_pages": 4,
        "sort": "price:asc",
    }
    assert payload["data"][0]["id"] == COURSE_ID
    list_query = service.list_calls[0]["list_query"]
    assert list_query.pagination.offset == 2
    assert list_query.sort.as_text == "price:asc"


def test_list_courses_uses_default_sort() -> None:
    service = FakeCourseService()
    with api_test_client(course_service=service) as client:
        payload = client.get("/api/v1/courses").json()

    assert payload["pagination"]["sort"] == "created_at:desc"
    assert payload["pagination"]["page"] == 1


def test_list_courses_rejects_invalid_page_before_store_call() -> None:
    service = FakeCourseService()
    with api_test_client(course_service=service) as client:
        response = client.get("/api/v1/courses", params={"page": 0})

    assert response.status_code == 400
    assert response.json()["error_code"] == "BAD_REQUEST"
    assert service.list_calls == []


def test_list_courses_rejects_limit_above_maximum() -> None:
    with api_test_client(course_service=FakeCourseService()) as client:
        response = client.get("/api/v1/courses", params={"limit": 6})

    assert response.status_code == 400
    assert "limit must be <= 5" in response.json()["message"]


def test_list_courses_rejects_unknown_sort_field() -> None:
    with api_test_client(course_service=FakeCourseService()) as client:
        response = client.get("/api/v1/courses", params={"sort": "password_hash:asc"})

    assert response.status_code == 400
    assert "Unsupported sort field" in response.json()["message"]


def test_list_courses_rejects_malformed_filter_id() -> None:
    with api_test_client(course_service=FakeCourseService()) as client:
        response = client.get("/api/v1/courses", params={"category_id": "abc"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid category ID format"


def test_get_course_rejects_malformed_id() -> None:
    with api_test_client(course_service=FakeCourseService()) as client:
        response = client.get("/api/v1/courses/not-a-uuid")

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["message"] == "Invalid course ID format"
    assert payload["request_id"]


def test_get_course_not_found_maps_to_404() -> None:
    service = FakeCourseService(error=NotFoundError("Course not found"))
    with api_test_client(course_service=service) as client:
        response = client.get(f"/api/v1/courses/{COURSE_ID}")

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"
    assert response.json()["message"] == "Course not found"


def test_update_course_forwards_only_fields_present_in_body() -> None:
    service = FakeCourseService()
    with api_test_client(course_service=service) as client:
        response = client.put(f"/api/v1/courses/{COURSE_ID}", json={"title": "Advanced SQL"})

    assert response.status_code == 200
    assert response.json()["message"] == "Course updated successfully"
    assert service.update_calls == [(COURSE_ID, {"title": "Advanced SQL"})]


def test_update_course_ignores_derived_counters() -> None:
    service = FakeCourseService()
    with api_test_client(course_service=service) as client:
        client.put(f"/api/v1/courses/{COURSE_ID}", json={"rating": 5, "total_students": 100})

    assert service.update_calls == [(COURSE_ID, {})]


def test_update_course_with_no_fields_returns_400() -> None:
    service = FakeCourseService(error=NoFieldsToUpdateError())
    with api_test_client(course_service=service) as client:
        response = client.put(f"/api/v1/courses/{COURSE_ID}", json={})

    assert response.status_code == 400
    assert response.json()["error_code"] == "NO_FIELDS_TO_UPDATE"
    assert response.json()["message"] == "No fields to update"


def test_update_course_slug_conflict_maps_to_409() -> None:
    service = FakeCourseService(error=ConflictError("Course slug already exists", fields=("slug",)))
    with api_test_client(course_service=service) as client:
        response = client.put(f"/api/v1/courses/{COURSE_ID}", json={"slug": "taken"})

    assert response.status_code == 409
    payload = response.json()
    assert payload["error_code"] == "CONFLICT"
    assert payload["details"] == {"fields": ["slug"]}


def test_update_course_rejects_invalid_enum_value() -> None:
    service = FakeCourseService()
    with api_test_client(course_service=service) as client:
        response = client.put(f"/api/v1/courses/{COURSE_ID}", json={"level": "expert"})

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"
    assert service.update_calls == []


def test_store_failure_maps_to_internal_store_error() -> None:
    service = FakeCourseService(error=OperationalError("SELECT 1", {}, Exception("connection lost")))
    with api_test_client(course_service=service) as client:
        response = client.get("/api/v1/courses")

    assert response.status_code == 500
    payload = response.json()
    assert payload["error_code"] == "INTERNAL_STORE_ERROR"
    assert "connection lost" not in payload["message"]


def test_review_stats_endpoint_returns_distribution() -> None:
    with api_test_client(course_service=FakeCourseService()) as client:
        response = client.get(f"/api/v1/courses/{COURSE_ID}/review-stats")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["average_rating"] == 3.0
    assert set(data["rating_distribution"]) == {"1", "2", "3", "4", "5"}
