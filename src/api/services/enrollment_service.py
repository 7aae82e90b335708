# This file implements enrollments and per-lecture progress tracking.
# It exists so routers can record learning activity without embedding SQL directly.
# Enrollment writes refresh the course's `total_students` counter. An enrollment update
# always touches `last_accessed_at`, so an empty update is a valid access ping.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from src.api.error_handlers import BadRequestError, ConflictError
from src.api.pagination import ListQuery
from src.api.services.resource_service import ResourceDefinition, ResourceService, write_result

ENROLLMENT_SORT_FIELD_MAP: dict[str, str] = {
    "enrolled_at": "enrolled_at",
    "progress_percentage": "progress_percentage",
    "last_accessed_at": "last_accessed_at",
}

ENROLLMENT_DEFINITION = ResourceDefinition(
    table="enrollments",
    label="Enrollment",
    columns=(
        "id",
        "user_id",
        "course_id",
        "enrolled_at",
        "completed_at",
        "progress_percentage",
        "last_accessed_at",
        "certificate_url",
    ),
    updatable_fields=("progress_percentage", "completed_at", "certificate_url"),
    sort_fields=ENROLLMENT_SORT_FIELD_MAP,
    default_sort="enrolled_at:desc",
    float_fields=frozenset({"progress_percentage"}),
    created_column="enrolled_at",
    touch_column="last_accessed_at",
    allow_touch_only=True,
    conflict_messages={"user_id,course_id": "User already enrolled in this course"},
)

PROGRESS_SORT_FIELD_MAP: dict[str, str] = {
    "watch_time": "watch_time",
    "completed_at": "completed_at",
    "created_at": "created_at",
    "updated_at": "updated_at",
}

PROGRESS_DEFINITION = ResourceDefinition(
    table="lecture_progress",
    label="Lecture progress",
    columns=(
        "id",
        "user_id",
        "lecture_id",
        "is_completed",
        "watch_time",
        "completed_at",
        "created_at",
        "updated_at",
    ),
    updatable_fields=("is_completed", "watch_time", "completed_at"),
    sort_fields=PROGRESS_SORT_FIELD_MAP,
    default_sort="updated_at:desc",
    bool_fields=frozenset({"is_completed"}),
    clearable_fields=frozenset({"completed_at"}),
    conflict_messages={
        "user_id,lecture_id": "Lecture progress already exists for this user and lecture"
    },
)


class EnrollmentService(ResourceService):
    """Data access for enrollment endpoints."""

    definition = ENROLLMENT_DEFINITION

    def list_enrollments(
        self,
        *,
        list_query: ListQuery,
        user_id: str | None,
        course_id: str | None,
        is_completed: bool | None,
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if user_id is not None:
            filters.append("user_id = :user_id")
            params["user_id"] = user_id
        if course_id is not None:
            filters.append("course_id = :course_id")
            params["course_id"] = course_id
        if is_completed is True:
            filters.append("completed_at IS NOT NULL")
        elif is_completed is False:
            filters.append("completed_at IS NULL")
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_enrollment(self, payload: dict[str, Any]) -> dict[str, Any]:
        user_id = payload["user_id"]
        course_id = payload["course_id"]
        self.require("users", user_id, "User not found")
        course = self.db.fetch_one("SELECT status FROM courses WHERE id = :id", {"id": course_id})
        if course is None:
            raise BadRequestError("Course not found")
        if course["status"] != "published":
            raise BadRequestError("Course is not available for enrollment")
        if self.exists("enrollments", user_id=user_id, course_id=course_id):
            raise ConflictError(
                "User already enrolled in this course", fields=("user_id", "course_id")
            )

        enrollment = self.insert({"user_id": user_id, "course_id": course_id})
        return write_result(enrollment, self.aggregates.refresh_course_students(course_id))

    def update_enrollment(self, enrollment_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(enrollment_id, changes)

    def delete_enrollment(self, enrollment_id: str) -> dict[str, Any]:
        enrollment = self.get(enrollment_id)
        self.delete(enrollment_id)
        return write_result(None, self.aggregates.refresh_course_students(enrollment["course_id"]))


class LectureProgressService(ResourceService):
    """Data access for lecture progress endpoints."""

    definition = PROGRESS_DEFINITION

    def list_progress(
        self,
        *,
        list_query: ListQuery,
        user_id: str | None,
        lecture_id: str | None,
        is_completed: bool | None,
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if user_id is not None:
            filters.append("user_id = :user_id")
            params["user_id"] = user_id
        if lecture_id is not None:
            filters.append("lecture_id = :lecture_id")
            params["lecture_id"] = lecture_id
        if is_completed is not None:
            filters.append("is_completed = :is_completed")
            params["is_completed"] = is_completed
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_progress(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.require("users", payload["user_id"], "User not found")
        self.require("course_lectures", payload["lecture_id"], "Lecture not found")
        if self.exists("lecture_progress", user_id=payload["user_id"], lecture_id=payload["lecture_id"]):
            raise ConflictError(
                "Lecture progress already exists for this user and lecture",
                fields=("user_id", "lecture_id"),
            )
        values = dict(payload)
        values["is_completed"] = False
        return self.insert(values)

    def update_progress(self, progress_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        values = {key: value for key, value in changes.items() if key != "completed_at"}
        is_completed = values.get("is_completed")
        if is_completed is True:
            values["completed_at"] = datetime.now(tz=UTC)
        elif is_completed is False:
            values["completed_at"] = None
        return self.update(progress_id, values)
