# This file implements course announcements.
# It exists so instructors can post course news without routers embedding SQL directly.
# An announcement created as published notifies every enrolled student on a best-effort basis.

from __future__ import annotations

from typing import Any

from src.api.error_handlers import BadRequestError
from src.api.pagination import ListQuery
from src.api.services.notification_service import notify_users
from src.api.services.resource_service import ResourceDefinition, ResourceService, write_result

ANNOUNCEMENT_SORT_FIELD_MAP: dict[str, str] = {
    "created_at": "created_at",
    "updated_at": "updated_at",
    "title": "title",
}

ANNOUNCEMENT_DEFINITION = ResourceDefinition(
    table="course_announcements",
    label="Announcement",
    columns=("id", "course_id", "title", "content", "is_published", "created_at", "updated_at"),
    updatable_fields=("title", "content", "is_published"),
    sort_fields=ANNOUNCEMENT_SORT_FIELD_MAP,
    bool_fields=frozenset({"is_published"}),
)


class AnnouncementService(ResourceService):
    """Data access for course announcement endpoints."""

    definition = ANNOUNCEMENT_DEFINITION

    def list_announcements(
        self, *, list_query: ListQuery, course_id: str | None, is_published: bool | None
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if course_id is not None:
            filters.append("course_id = :course_id")
            params["course_id"] = course_id
        if is_published is not None:
            filters.append("is_published = :is_published")
            params["is_published"] = is_published
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_announcement(self, payload: dict[str, Any]) -> dict[str, Any]:
        course = self.db.fetch_one(
            "SELECT id, title FROM courses WHERE id = :id", {"id": payload["course_id"]}
        )
        if course is None:
            raise BadRequestError("Course not found")

        values = dict(payload)
        values["is_published"] = bool(values.get("is_published"))
        announcement = self.insert(values)
        if not announcement["is_published"]:
            return write_result(announcement)

        students = self.db.fetch_all(
            "SELECT user_id FROM enrollments WHERE course_id = :course_id",
            {"course_id": payload["course_id"]},
        )
        warning = notify_users(
            self.db,
            user_ids=[str(row["user_id"]) for row in students],
            title=f"New announcement in {course['title']}",
            message=announcement["title"],
            notification_type="new_announcement",
            related_id=announcement["id"],
        )
        return write_result(announcement, warning)

    def update_announcement(self, announcement_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(announcement_id, changes)

    def delete_announcement(self, announcement_id: str) -> None:
        self.delete(announcement_id)
