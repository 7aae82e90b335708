# This file implements course sections and lectures.
# It exists so routers can manage curriculum structure without embedding SQL directly.
# Lecture creates and deletes refresh the owning course's `total_lectures` counter.

from __future__ import annotations

from typing import Any

from src.api.error_handlers import BadRequestError
from src.api.pagination import ListQuery
from src.api.services.resource_service import (
    ResourceDefinition,
    ResourceService,
    decode_row,
    write_result,
)

CONTENT_SORT_FIELD_MAP: dict[str, str] = {
    "sort_order": "sort_order",
    "title": "title",
    "created_at": "created_at",
}

SECTION_DEFINITION = ResourceDefinition(
    table="course_sections",
    label="Course section",
    columns=("id", "course_id", "title", "description", "sort_order", "created_at", "updated_at"),
    updatable_fields=("title", "description", "sort_order"),
    sort_fields=CONTENT_SORT_FIELD_MAP,
    default_sort="sort_order:asc",
)

LECTURE_DEFINITION = ResourceDefinition(
    table="course_lectures",
    label="Course lecture",
    columns=(
        "id",
        "section_id",
        "title",
        "description",
        "content_type",
        "video_url",
        "video_duration",
        "article_content",
        "file_url",
        "sort_order",
        "is_preview",
        "is_downloadable",
        "created_at",
        "updated_at",
    ),
    updatable_fields=(
        "title",
        "description",
        "content_type",
        "video_url",
        "video_duration",
        "article_content",
        "file_url",
        "sort_order",
        "is_preview",
        "is_downloadable",
    ),
    sort_fields=CONTENT_SORT_FIELD_MAP,
    default_sort="sort_order:asc",
    bool_fields=frozenset({"is_preview", "is_downloadable"}),
)


class CourseSectionService(ResourceService):
    """Data access for course section endpoints."""

    definition = SECTION_DEFINITION

    def list_sections(
        self, *, list_query: ListQuery, course_id: str | None, include_lectures: bool
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if course_id is not None:
            filters.append("course_id = :course_id")
            params["course_id"] = course_id
        result = self.list_records(list_query=list_query, filters=filters, params=params)
        if include_lectures:
            for section in result["rows"]:
                section["lectures"] = self._section_lectures(section["id"])
        return result

    def get_section(self, section_id: str, *, include_lectures: bool) -> dict[str, Any]:
        section = self.get(section_id)
        if include_lectures:
            section["lectures"] = self._section_lectures(section_id)
        return section

    def _section_lectures(self, section_id: str) -> list[dict[str, Any]]:
        query = f"""
        SELECT {LECTURE_DEFINITION.select_list}
        FROM course_lectures
        WHERE section_id = :section_id
        ORDER BY sort_order ASC, id ASC
        """
        rows = self.db.fetch_all(query, {"section_id": section_id})
        return [decode_row(LECTURE_DEFINITION, row) for row in rows]

    def create_section(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.require("courses", payload["course_id"], "Course not found")
        return self.insert(payload)

    def update_section(self, section_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(section_id, changes)

    def delete_section(self, section_id: str) -> None:
        self.get(section_id)
        if self.count("course_lectures", section_id=section_id) > 0:
            raise BadRequestError("Cannot delete section that contains lectures")
        self.delete(section_id)


class CourseLectureService(ResourceService):
    """Data access for course lecture endpoints."""

    definition = LECTURE_DEFINITION

    def list_lectures(
        self, *, list_query: ListQuery, section_id: str | None, content_type: str | None
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if section_id is not None:
            filters.append("section_id = :section_id")
            params["section_id"] = section_id
        if content_type:
            filters.append("content_type = :content_type")
            params["content_type"] = content_type
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def _course_id_for_section(self, section_id: str) -> str | None:
        row = self.db.fetch_one(
            "SELECT course_id FROM course_sections WHERE id = :id", {"id": section_id}
        )
        return None if row is None else str(row["course_id"])

    def create_lecture(self, payload: dict[str, Any]) -> dict[str, Any]:
        course_id = self._course_id_for_section(payload["section_id"])
        if course_id is None:
            raise BadRequestError("Section not found")
        lecture = self.insert(payload)
        return write_result(lecture, self.aggregates.refresh_course_lectures(course_id))

    def update_lecture(self, lecture_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(lecture_id, changes)

    def delete_lecture(self, lecture_id: str) -> dict[str, Any]:
        lecture = self.get(lecture_id)
        course_id = self._course_id_for_section(lecture["section_id"])
        self.delete(lecture_id)
        warning = self.aggregates.refresh_course_lectures(course_id) if course_id else None
        return write_result(None, warning)
