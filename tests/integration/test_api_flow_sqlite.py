"""
End-to-end API flow with real services bound to a SQLite database.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

from src.api.services.course_service import CourseService
from src.api.services.enrollment_service import EnrollmentService
from src.api.services.review_service import CourseReviewService
from src.api.services.wishlist_service import WishlistService
from tests.api.support import api_test_client
from tests.integration.support import Marketplace


def test_enroll_review_and_read_back_course(marketplace: Marketplace) -> None:
    student = marketplace.add_student("joan")
    course_id = marketplace.course["id"]
    services = {
        "course_service": marketplace.service(CourseService),
        "enrollment_service": marketplace.service(EnrollmentService),
        "review_service": marketplace.service(CourseReviewService),
        "wishlist_service": marketplace.service(WishlistService),
    }

    with api_test_client(**services) as client:
        wished = client.post("/api/v1/wishlists", json={"user_id": student["id"], "course_id": course_id})
        assert wished.status_code == 201

        enrolled = client.post(
            "/api/v1/enrollments", json={"user_id": student["id"], "course_id": course_id}
        )
        assert enrolled.status_code == 201
        assert enrolled.json()["warnings"] is None

        duplicate = client.post(
            "/api/v1/enrollments", json={"user_id": student["id"], "course_id": course_id}
        )
        assert duplicate.status_code == 409
        assert duplicate.json()["details"] == {"fields": ["user_id", "course_id"]}

        reviewed = client.post(
            "/api/v1/course-reviews",
            json={"user_id": student["id"], "course_id": course_id, "rating": 4, "review_text": "Clear"},
        )
        assert reviewed.status_code == 201

        course = client.get(f"/api/v1/courses/{course_id}").json()["data"]
        assert course["total_students"] == 1
        assert course["total_reviews"] == 1
        assert course["rating"] == 4.0

        stats = client.get(f"/api/v1/courses/{course_id}/review-stats").json()["data"]
        assert stats["rating_distribution"]["4"] == 1

        check = client.get(
            "/api/v1/wishlists/check", params={"user_id": student["id"], "course_id": course_id}
        ).json()["data"]
        assert check["in_wishlist"] is True


def test_partial_course_update_over_http(marketplace: Marketplace) -> None:
    course_id = marketplace.course["id"]
    with api_test_client(course_service=marketplace.service(CourseService)) as client:
        response = client.put(f"/api/v1/courses/{course_id}", json={"short_description": "Learn SQL fast"})
        empty = client.put(f"/api/v1/courses/{course_id}", json={})
        missing = client.put(
            "/api/v1/courses/00000000-0000-4000-8000-000000000000", json={"title": "Ghost"}
        )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["short_description"] == "Learn SQL fast"
    assert data["title"] == marketplace.course["title"]
    assert data["price"] == 19.99
    assert empty.status_code == 400
    assert empty.json()["error_code"] == "NO_FIELDS_TO_UPDATE"
    assert missing.status_code == 404
    assert missing.json()["message"] == "Course not found"


def test_ready_once_schema_is_applied(marketplace: Marketplace) -> None:
    with api_test_client(db_client=marketplace.db) as client:
        payload = client.get("/ready").json()

    assert payload["ready"] is True
    assert payload["missing_tables"] == []
