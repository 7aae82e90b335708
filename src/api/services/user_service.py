# This file implements user accounts and instructor profiles.
# It exists so routers can manage people records without embedding SQL directly.
# Passwords are hashed with passlib bcrypt on create and never leave the store.
# Instructor profiles attach to users whose role allows teaching. Deleting a user cascades
# away their reviews, enrollments, and answers, so the affected aggregates are refreshed.

from __future__ import annotations

from typing import Any

from passlib.context import CryptContext

from src.api.error_handlers import BadRequestError, ConflictError
from src.api.pagination import ListQuery
from src.api.services.resource_service import ResourceDefinition, ResourceService, write_result
from src.api.sql_builder import validate_identifier

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TEACHING_ROLES: frozenset[str] = frozenset({"instructor", "admin"})

USER_SORT_FIELD_MAP: dict[str, str] = {
    "email": "email",
    "username": "username",
    "role": "role",
    "created_at": "created_at",
}

USER_DEFINITION = ResourceDefinition(
    table="users",
    label="User",
    columns=(
        "id",
        "email",
        "username",
        "first_name",
        "last_name",
        "role",
        "bio",
        "avatar_url",
        "is_verified",
        "created_at",
        "updated_at",
    ),
    updatable_fields=(
        "email",
        "username",
        "first_name",
        "last_name",
        "role",
        "bio",
        "avatar_url",
    ),
    sort_fields=USER_SORT_FIELD_MAP,
    bool_fields=frozenset({"is_verified"}),
    conflict_messages={
        "email": "Email already exists",
        "username": "Username already exists",
    },
)

PROFILE_SORT_FIELD_MAP: dict[str, str] = {
    "rating": "rating",
    "experience_years": "experience_years",
    "total_students": "total_students",
    "created_at": "created_at",
}

INSTRUCTOR_PROFILE_DEFINITION = ResourceDefinition(
    table="instructor_profiles",
    label="Instructor profile",
    columns=(
        "id",
        "user_id",
        "title",
        "expertise",
        "experience_years",
        "rating",
        "total_students",
        "total_courses",
        "total_reviews",
        "website_url",
        "linkedin_url",
        "github_url",
        "is_approved",
        "created_at",
        "updated_at",
    ),
    updatable_fields=(
        "title",
        "expertise",
        "experience_years",
        "website_url",
        "linkedin_url",
        "github_url",
        "is_approved",
    ),
    sort_fields=PROFILE_SORT_FIELD_MAP,
    bool_fields=frozenset({"is_approved"}),
    float_fields=frozenset({"rating"}),
    json_fields=frozenset({"expertise"}),
    conflict_messages={"user_id": "Instructor profile already exists for this user"},
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


class UserService(ResourceService):
    """Data access for user endpoints."""

    definition = USER_DEFINITION

    def list_users(
        self, *, list_query: ListQuery, role: str | None, search: str | None
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if role:
            filters.append("role = :role")
            params["role"] = role
        if search:
            filters.append(
                "(LOWER(email) LIKE :search OR LOWER(username) LIKE :search"
                " OR LOWER(first_name) LIKE :search OR LOWER(last_name) LIKE :search)"
            )
            params["search"] = f"%{search.lower()}%"
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_user(self, payload: dict[str, Any]) -> dict[str, Any]:
        values = dict(payload)
        values["password_hash"] = hash_password(values.pop("password"))
        if values.get("role") is None:
            values["role"] = "student"
        values["is_verified"] = False
        return self.insert(values)

    def update_user(self, user_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(user_id, changes)

    def delete_user(self, user_id: str) -> dict[str, Any]:
        self.get(user_id)
        if self.count("courses", instructor_id=user_id) > 0:
            raise BadRequestError("Cannot delete user who has associated courses")

        reviewed = self._parent_ids("course_reviews", "course_id", user_id)
        enrolled = self._parent_ids("enrollments", "course_id", user_id)
        answered = self._parent_ids("course_answers", "question_id", user_id)
        self.delete(user_id)

        warnings = [self.aggregates.refresh_course_reviews(course_id) for course_id in reviewed]
        warnings += [self.aggregates.refresh_course_students(course_id) for course_id in enrolled]
        warnings += [self.aggregates.refresh_question_answered(question_id) for question_id in answered]
        return write_result(None, *warnings)

    def _parent_ids(self, table: str, column: str, user_id: str) -> list[str]:
        """Distinct parent ids of the user's rows in a child table, read before the cascade."""

        query = (
            f"SELECT DISTINCT {validate_identifier(column)} AS parent_id "
            f"FROM {validate_identifier(table)} WHERE user_id = :user_id"
        )
        return [str(row["parent_id"]) for row in self.db.fetch_all(query, {"user_id": user_id})]


class InstructorProfileService(ResourceService):
    """Data access for instructor profile endpoints."""

    definition = INSTRUCTOR_PROFILE_DEFINITION

    def list_profiles(
        self, *, list_query: ListQuery, is_approved: bool | None, user_id: str | None
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if is_approved is not None:
            filters.append("is_approved = :is_approved")
            params["is_approved"] = is_approved
        if user_id is not None:
            filters.append("user_id = :user_id")
            params["user_id"] = user_id
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_profile(self, payload: dict[str, Any]) -> dict[str, Any]:
        user_id = payload["user_id"]
        row = self.db.fetch_one("SELECT role FROM users WHERE id = :id", {"id": user_id})
        if row is None:
            raise BadRequestError("User not found")
        if row["role"] not in TEACHING_ROLES:
            raise BadRequestError("User must be an instructor to create profile")
        if self.exists("instructor_profiles", user_id=user_id):
            raise ConflictError(
                "Instructor profile already exists for this user", fields=("user_id",)
            )

        return self.insert(payload)

    def update_profile(self, profile_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(profile_id, changes)

    def delete_profile(self, profile_id: str) -> None:
        self.delete(profile_id)
