# This file implements course persistence and course-level read models.
# It exists so routers can list, filter, and edit courses without embedding SQL directly.
# Rating, review, student, and lecture counters are derived from child rows and never
# written by clients; publishing a course stamps `published_at` in the same update.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from src.api.error_handlers import BadRequestError
from src.api.pagination import ListQuery
from src.api.services.resource_service import ResourceDefinition, ResourceService
from src.api.services.user_service import TEACHING_ROLES

COURSE_SORT_FIELD_MAP: dict[str, str] = {
    "title": "title",
    "price": "price",
    "rating": "rating",
    "total_students": "total_students",
    "published_at": "published_at",
    "created_at": "created_at",
}

COURSE_DEFINITION = ResourceDefinition(
    table="courses",
    label="Course",
    columns=(
        "id",
        "title",
        "slug",
        "description",
        "short_description",
        "thumbnail_url",
        "preview_video_url",
        "instructor_id",
        "category_id",
        "price",
        "discount_price",
        "language",
        "level",
        "duration_hours",
        "total_lectures",
        "status",
        "requirements",
        "what_you_learn",
        "target_audience",
        "rating",
        "total_students",
        "total_reviews",
        "published_at",
        "created_at",
        "updated_at",
    ),
    # published_at is stamped by the service when status moves to published.
    updatable_fields=(
        "title",
        "slug",
        "description",
        "short_description",
        "thumbnail_url",
        "preview_video_url",
        "category_id",
        "price",
        "discount_price",
        "language",
        "level",
        "status",
        "published_at",
        "requirements",
        "what_you_learn",
        "target_audience",
    ),
    sort_fields=COURSE_SORT_FIELD_MAP,
    float_fields=frozenset({"price", "discount_price", "rating"}),
    json_fields=frozenset({"requirements", "what_you_learn", "target_audience"}),
    conflict_messages={"slug": "Course slug already exists"},
)


class CourseService(ResourceService):
    """Data access for course endpoints."""

    definition = COURSE_DEFINITION

    def list_courses(
        self,
        *,
        list_query: ListQuery,
        category_id: str | None,
        instructor_id: str | None,
        level: str | None,
        status: str | None,
        search: str | None,
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if category_id is not None:
            filters.append("category_id = :category_id")
            params["category_id"] = category_id
        if instructor_id is not None:
            filters.append("instructor_id = :instructor_id")
            params["instructor_id"] = instructor_id
        if level:
            filters.append("level = :level")
            params["level"] = level
        if status:
            filters.append("status = :status")
            params["status"] = status
        if search:
            filters.append("(LOWER(title) LIKE :search OR LOWER(COALESCE(short_description, '')) LIKE :search)")
            params["search"] = f"%{search.lower()}%"
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_course(self, payload: dict[str, Any]) -> dict[str, Any]:
        row = self.db.fetch_one("SELECT role FROM users WHERE id = :id", {"id": payload["instructor_id"]})
        if row is None:
            raise BadRequestError("Instructor not found")
        if row["role"] not in TEACHING_ROLES:
            raise BadRequestError("User is not an instructor")
        self.require("categories", payload["category_id"], "Category not found")

        values = dict(payload)
        for key in ("requirements", "what_you_learn", "target_audience"):
            values[key] = values.get(key) or []
        values["status"] = "draft"
        return self.insert(values)

    def update_course(self, course_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        values = dict(changes)
        category_id = values.get("category_id")
        if category_id is not None:
            self.require("categories", category_id, "Category not found")
        if values.get("status") == "published":
            values["published_at"] = datetime.now(tz=UTC)
        return self.update(course_id, values)

    def delete_course(self, course_id: str) -> None:
        self.get(course_id)
        if self.count("enrollments", course_id=course_id) > 0:
            raise BadRequestError("Cannot delete course that has enrollments")
        self.delete(course_id)

    def get_review_stats(self, course_id: str) -> dict[str, Any]:
        self.get(course_id)
        summary = self.db.fetch_one(
            """
            SELECT COUNT(*) AS total_reviews, AVG(rating) AS average_rating
            FROM course_reviews
            WHERE course_id = :course_id AND is_approved = TRUE
            """,
            {"course_id": course_id},
        ) or {"total_reviews": 0, "average_rating": None}
        rows = self.db.fetch_all(
            """
            SELECT rating, COUNT(*) AS review_count
            FROM course_reviews
            WHERE course_id = :course_id AND is_approved = TRUE
            GROUP BY rating
            ORDER BY rating
            """,
            {"course_id": course_id},
        )

        distribution = {str(rating): 0 for rating in range(1, 6)}
        for row in rows:
            distribution[str(int(row["rating"]))] = int(row["review_count"])

        average = summary["average_rating"]
        return {
            "course_id": course_id,
            "total_reviews": int(summary["total_reviews"] or 0),
            "average_rating": round(float(average), 2) if average is not None else 0.0,
            "rating_distribution": distribution,
        }
