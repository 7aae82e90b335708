# This file tests write endpoints and fixed routes across resources against fake services.
# It exists to validate follow-up warnings, route ordering, and body ID validation.

from __future__ import annotations

from typing import Any

from src.api.error_handlers import NotFoundError
from tests.api.support import COURSE_ID, NOW, USER_ID, api_test_client

REVIEW_ID = "5e6f7a8b-9c0d-4e1f-8a2b-3c4d5e6f7a8b"


def review_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "id": REVIEW_ID,
        "user_id": USER_ID,
        "course_id": COURSE_ID,
        "rating": 4,
        "review_text": None,
        "is_approved": True,
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


class FakeReviewService:
    def __init__(self, *, warning: str | None = None) -> None:
        self.warning = warning
        self.created: list[dict[str, Any]] = []

    def create_review(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.created.append(payload)
        return {"data": review_row(rating=payload["rating"]), "warnings": [self.warning] if self.warning else None}

    def delete_review(self, review_id: str) -> dict[str, Any]:
        return {"data": None, "warnings": [self.warning] if self.warning else None}


class FakeWishlistService:
    def __init__(self) -> None:
        self.removed: list[tuple[str, str]] = []

    def check(self, user_id: str, course_id: str) -> dict[str, Any]:
        return {"user_id": user_id, "course_id": course_id, "in_wishlist": True}

    def remove(self, user_id: str, course_id: str) -> None:
        self.removed.append((user_id, course_id))
        if course_id != COURSE_ID:
            raise NotFoundError("Wishlist item not found")


class FakeNotificationService:
    def mark_all_read(self, user_id: str) -> dict[str, Any]:
        return {"user_id": user_id, "updated_count": 3}


class FakeCouponService:
    def validate_coupon(self, code: str, order_amount: float) -> dict[str, Any]:
        return {
            "is_valid": False,
            "message": "Minimum order amount is 50.00",
            "discount_amount": None,
            "coupon": None,
        }


class FakeCategoryService:
    def __init__(self) -> None:
        self.list_calls: list[dict[str, Any]] = []

    def list_categories(self, **kwargs: Any) -> dict[str, Any]:
        self.list_calls.append(kwargs)
        return {"rows": [], "total_count": 0}


def test_create_review_returns_201_without_warnings() -> None:
    service = FakeReviewService()
    body = {"user_id": USER_ID.upper(), "course_id": COURSE_ID, "rating": 5}
    with api_test_client(review_service=service) as client:
        response = client.post("/api/v1/course-reviews", json=body)

    assert response.status_code == 201
    payload = response.json()
    assert payload["message"] == "Review created successfully"
    assert payload["warnings"] is None
    assert payload["data"]["rating"] == 5
    assert service.created[0]["user_id"] == USER_ID


def test_create_review_surfaces_aggregate_warning() -> None:
    warning = "Failed to refresh course review stats; the value may be stale until the next change."
    with api_test_client(review_service=FakeReviewService(warning=warning)) as client:
        response = client.post(
            "/api/v1/course-reviews", json={"user_id": USER_ID, "course_id": COURSE_ID, "rating": 4}
        )

    assert response.status_code == 201
    assert response.json()["success"] is True
    assert response.json()["warnings"] == [warning]


def test_create_review_rejects_out_of_range_rating() -> None:
    service = FakeReviewService()
    with api_test_client(review_service=service) as client:
        response = client.post(
            "/api/v1/course-reviews", json={"user_id": USER_ID, "course_id": COURSE_ID, "rating": 6}
        )

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"
    assert service.created == []


def test_create_review_rejects_malformed_body_id() -> None:
    service = FakeReviewService()
    with api_test_client(review_service=service) as client:
        response = client.post(
            "/api/v1/course-reviews", json={"user_id": "u-1", "course_id": COURSE_ID, "rating": 4}
        )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid user ID format"
    assert service.created == []


def test_delete_review_returns_null_data() -> None:
    with api_test_client(review_service=FakeReviewService()) as client:
        response = client.delete(f"/api/v1/course-reviews/{REVIEW_ID}")

    assert response.status_code == 200
    assert response.json()["data"] is None
    assert response.json()["message"] == "Review deleted successfully"


def test_wishlist_check_route_is_not_treated_as_id() -> None:
    with api_test_client(wishlist_service=FakeWishlistService()) as client:
        response = client.get(
            "/api/v1/wishlists/check", params={"user_id": USER_ID, "course_id": COURSE_ID}
        )

    assert response.status_code == 200
    assert response.json()["data"]["in_wishlist"] is True


def test_wishlist_remove_missing_item_returns_404() -> None:
    service = FakeWishlistService()
    other_course = "11111111-2222-4333-8444-555555555555"
    with api_test_client(wishlist_service=service) as client:
        response = client.delete(
            "/api/v1/wishlists/remove", params={"user_id": USER_ID, "course_id": other_course}
        )

    assert response.status_code == 404
    assert response.json()["message"] == "Wishlist item not found"
    assert service.removed == [(USER_ID, other_course)]


def test_mark_all_read_route_is_not_treated_as_id() -> None:
    with api_test_client(notification_service=FakeNotificationService()) as client:
        response = client.put("/api/v1/notifications/mark-all-read", json={"user_id": USER_ID})

    assert response.status_code == 200
    assert response.json()["data"] == {"user_id": USER_ID, "updated_count": 3}


def test_coupon_validation_reports_reason_in_payload() -> None:
    with api_test_client(coupon_service=FakeCouponService()) as client:
        response = client.post("/api/v1/coupons/validate", json={"code": "BIG", "order_amount": 20})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["is_valid"] is False
    assert data["message"] == "Minimum order amount is 50.00"


def test_category_list_parent_null_means_roots() -> None:
    service = FakeCategoryService()
    with api_test_client(category_service=service) as client:
        response = client.get("/api/v1/categories", params={"parent_id": "null"})

    assert response.status_code == 200
    assert service.list_calls[0]["roots_only"] is True
    assert service.list_calls[0]["parent_id"] is None
    assert response.json()["pagination"]["sort"] == "sort_order:asc"


class FakeUserService:
    def delete_user(self, user_id: str) -> dict[str, Any]:
        return {"data": None, "warnings": ["Failed to refresh course student count; the value may be stale until the next change."]}


def test_delete_user_surfaces_refresh_warnings() -> None:
    with api_test_client(user_service=FakeUserService()) as client:
        response = client.delete(f"/api/v1/users/{USER_ID}")

    assert response.status_code == 200
    payload = response.json()
    assert payload["data"] is None
    assert payload["message"] == "User deleted successfully"
    assert payload["warnings"] == [
        "Failed to refresh course student count; the value may be stale until the next change."
    ]
