# This file implements course reviews.
# It exists so routers can record ratings without embedding SQL directly.
# Only enrolled students may review a course, and each may review it once.
# Writes that change the approved rating set refresh the course rating and review count.

from __future__ import annotations

from typing import Any

from src.api.error_handlers import BadRequestError, ConflictError
from src.api.pagination import ListQuery
from src.api.services.resource_service import ResourceDefinition, ResourceService, write_result

REVIEW_SORT_FIELD_MAP: dict[str, str] = {
    "rating": "rating",
    "created_at": "created_at",
    "updated_at": "updated_at",
}

# Fields whose change alters the course rating aggregate.
RATING_AFFECTING_FIELDS = frozenset({"rating", "is_approved"})

REVIEW_DEFINITION = ResourceDefinition(
    table="course_reviews",
    label="Course review",
    columns=(
        "id",
        "user_id",
        "course_id",
        "rating",
        "review_text",
        "is_approved",
        "created_at",
        "updated_at",
    ),
    updatable_fields=("rating", "review_text", "is_approved"),
    sort_fields=REVIEW_SORT_FIELD_MAP,
    bool_fields=frozenset({"is_approved"}),
    conflict_messages={"user_id,course_id": "User has already reviewed this course"},
)


class CourseReviewService(ResourceService):
    """Data access for course review endpoints."""

    definition = REVIEW_DEFINITION

    def list_reviews(
        self,
        *,
        list_query: ListQuery,
        course_id: str | None,
        user_id: str | None,
        rating: int | None,
        is_approved: bool | None,
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if course_id is not None:
            filters.append("course_id = :course_id")
            params["course_id"] = course_id
        if user_id is not None:
            filters.append("user_id = :user_id")
            params["user_id"] = user_id
        if rating is not None:
            filters.append("rating = :rating")
            params["rating"] = rating
        if is_approved is not None:
            filters.append("is_approved = :is_approved")
            params["is_approved"] = is_approved
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_review(self, payload: dict[str, Any]) -> dict[str, Any]:
        user_id = payload["user_id"]
        course_id = payload["course_id"]
        self.require("users", user_id, "User not found")
        self.require("courses", course_id, "Course not found")
        if not self.exists("enrollments", user_id=user_id, course_id=course_id):
            raise BadRequestError("User must be enrolled in the course to review it")
        if self.exists("course_reviews", user_id=user_id, course_id=course_id):
            raise ConflictError(
                "User has already reviewed this course", fields=("user_id", "course_id")
            )

        values = dict(payload)
        values["is_approved"] = True
        review = self.insert(values)
        return write_result(review, self.aggregates.refresh_course_reviews(course_id))

    def update_review(self, review_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        review = self.update(review_id, changes)
        warning = None
        if any(changes.get(key) is not None for key in RATING_AFFECTING_FIELDS):
            warning = self.aggregates.refresh_course_reviews(review["course_id"])
        return write_result(review, warning)

    def delete_review(self, review_id: str) -> dict[str, Any]:
        review = self.get(review_id)
        self.delete(review_id)
        return write_result(None, self.aggregates.refresh_course_reviews(review["course_id"]))
