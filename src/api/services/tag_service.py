# This file implements tag persistence and the course-to-tag relationship.
# It exists so routers can label courses without embedding SQL directly.
# Tag names and slugs are unique; a course holds each tag at most once.

from __future__ import annotations

from typing import Any

from src.api.error_handlers import BadRequestError, ConflictError, NotFoundError
from src.api.pagination import ListQuery
from src.api.services.resource_service import ResourceDefinition, ResourceService

TAG_SORT_FIELD_MAP: dict[str, str] = {
    "name": "name",
    "slug": "slug",
    "created_at": "created_at",
}

TAG_DEFINITION = ResourceDefinition(
    table="tags",
    label="Tag",
    columns=("id", "name", "slug", "description", "color", "created_at", "updated_at"),
    updatable_fields=("name", "slug", "description", "color"),
    sort_fields=TAG_SORT_FIELD_MAP,
    default_sort="name:asc",
    conflict_messages={
        "name": "Tag name already exists",
        "slug": "Tag slug already exists",
    },
)


class TagService(ResourceService):
    """Data access for tag and course-tag endpoints."""

    definition = TAG_DEFINITION

    def list_tags(self, *, list_query: ListQuery, search: str | None) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if search:
            filters.append("(LOWER(name) LIKE :search OR LOWER(slug) LIKE :search)")
            params["search"] = f"%{search.lower()}%"
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_tag(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self.insert(payload)

    def update_tag(self, tag_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(tag_id, changes)

    def delete_tag(self, tag_id: str) -> None:
        self.get(tag_id)
        self.db.execute("DELETE FROM course_tags WHERE tag_id = :tag_id", {"tag_id": tag_id})
        self.delete(tag_id)

    def list_course_tags(self, course_id: str) -> list[dict[str, Any]]:
        if not self.exists("courses", id=course_id):
            raise NotFoundError("Course not found")
        query = """
        SELECT t.id, t.name, t.slug, t.description, t.color, t.created_at, t.updated_at
        FROM tags t
        JOIN course_tags ct ON ct.tag_id = t.id
        WHERE ct.course_id = :course_id
        ORDER BY t.name ASC
        """
        return [self.decode(row) for row in self.db.fetch_all(query, {"course_id": course_id})]

    def add_course_tag(self, *, course_id: str, tag_id: str) -> dict[str, Any]:
        if not self.exists("courses", id=course_id):
            raise BadRequestError("Course not found")
        tag = self.find(tag_id)
        if tag is None:
            raise BadRequestError("Tag not found")
        if self.exists("course_tags", course_id=course_id, tag_id=tag_id):
            raise ConflictError("Tag already added to this course", fields=("course_id", "tag_id"))
        self.db.execute(
            "INSERT INTO course_tags (course_id, tag_id) VALUES (:course_id, :tag_id)",
            {"course_id": course_id, "tag_id": tag_id},
        )
        return {"course_id": course_id, "tag_id": tag_id, "tag": tag}

    def remove_course_tag(self, *, course_id: str, tag_id: str) -> None:
        removed = self.db.execute(
            "DELETE FROM course_tags WHERE course_id = :course_id AND tag_id = :tag_id",
            {"course_id": course_id, "tag_id": tag_id},
        )
        if removed == 0:
            raise NotFoundError("Course tag relationship not found")
