# This file implements user wishlists.
# It exists so routers can save and look up courses a user is considering.
# Wishlist entries are insert-or-delete only and never updated in place.

from __future__ import annotations

from typing import Any

from src.api.error_handlers import BadRequestError, ConflictError, NotFoundError
from src.api.pagination import ListQuery
from src.api.services.resource_service import ResourceDefinition, ResourceService

WISHLIST_SORT_FIELD_MAP: dict[str, str] = {"created_at": "created_at"}

WISHLIST_DEFINITION = ResourceDefinition(
    table="wishlists",
    label="Wishlist item",
    columns=("id", "user_id", "course_id", "created_at"),
    sort_fields=WISHLIST_SORT_FIELD_MAP,
    touch_column=None,
    conflict_messages={"user_id,course_id": "Course is already in user's wishlist"},
)


class WishlistService(ResourceService):
    """Data access for wishlist endpoints."""

    definition = WISHLIST_DEFINITION

    def list_wishlists(
        self, *, list_query: ListQuery, user_id: str | None, course_id: str | None
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if user_id is not None:
            filters.append("user_id = :user_id")
            params["user_id"] = user_id
        if course_id is not None:
            filters.append("course_id = :course_id")
            params["course_id"] = course_id
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_wishlist(self, payload: dict[str, Any]) -> dict[str, Any]:
        user_id = payload["user_id"]
        course_id = payload["course_id"]
        self.require("users", user_id, "User not found")
        self.require("courses", course_id, "Course not found")
        if self.exists("enrollments", user_id=user_id, course_id=course_id):
            raise BadRequestError("User is already enrolled in this course")
        if self.exists("wishlists", user_id=user_id, course_id=course_id):
            raise ConflictError(
                "Course is already in user's wishlist", fields=("user_id", "course_id")
            )
        return self.insert({"user_id": user_id, "course_id": course_id})

    def delete_wishlist(self, wishlist_id: str) -> None:
        self.delete(wishlist_id)

    def check(self, user_id: str, course_id: str) -> dict[str, Any]:
        return {
            "user_id": user_id,
            "course_id": course_id,
            "in_wishlist": self.exists("wishlists", user_id=user_id, course_id=course_id),
        }

    def remove(self, user_id: str, course_id: str) -> None:
        deleted = self.db.execute(
            "DELETE FROM wishlists WHERE user_id = :user_id AND course_id = :course_id",
            {"user_id": user_id, "course_id": course_id},
        )
        if deleted == 0:
            raise NotFoundError("Wishlist item not found")
