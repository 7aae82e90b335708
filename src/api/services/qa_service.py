# This file implements course questions and their answers.
# It exists so routers can run course Q&A without embedding SQL directly.
# A question's `is_answered` flag is derived from its answers: creating or deleting an
# answer recomputes it, and a new answer notifies the question author.

from __future__ import annotations

from typing import Any

from src.api.error_handlers import BadRequestError
from src.api.pagination import ListQuery
from src.api.services.notification_service import notify_users
from src.api.services.resource_service import (
    ResourceDefinition,
    ResourceService,
    decode_row,
    write_result,
)

QUESTION_SORT_FIELD_MAP: dict[str, str] = {
    "created_at": "created_at",
    "updated_at": "updated_at",
    "title": "title",
}

QUESTION_DEFINITION = ResourceDefinition(
    table="course_questions",
    label="Question",
    columns=(
        "id",
        "course_id",
        "lecture_id",
        "user_id",
        "title",
        "question",
        "is_answered",
        "created_at",
        "updated_at",
    ),
    updatable_fields=("title", "question"),
    sort_fields=QUESTION_SORT_FIELD_MAP,
    bool_fields=frozenset({"is_answered"}),
)

ANSWER_SORT_FIELD_MAP: dict[str, str] = {
    "created_at": "created_at",
    "votes": "votes",
}

ANSWER_DEFINITION = ResourceDefinition(
    table="course_answers",
    label="Answer",
    columns=(
        "id",
        "question_id",
        "user_id",
        "answer",
        "is_instructor_answer",
        "votes",
        "created_at",
        "updated_at",
    ),
    updatable_fields=("answer", "is_instructor_answer", "votes"),
    sort_fields=ANSWER_SORT_FIELD_MAP,
    default_sort="created_at:asc",
    bool_fields=frozenset({"is_instructor_answer"}),
)


class QuestionService(ResourceService):
    """Data access for course question endpoints."""

    definition = QUESTION_DEFINITION

    def list_questions(
        self,
        *,
        list_query: ListQuery,
        course_id: str | None,
        user_id: str | None,
        is_answered: bool | None,
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if course_id is not None:
            filters.append("course_id = :course_id")
            params["course_id"] = course_id
        if user_id is not None:
            filters.append("user_id = :user_id")
            params["user_id"] = user_id
        if is_answered is not None:
            filters.append("is_answered = :is_answered")
            params["is_answered"] = is_answered
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_question(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.require("courses", payload["course_id"], "Course not found")
        lecture_id = payload.get("lecture_id")
        if lecture_id is not None:
            self.require("course_lectures", lecture_id, "Lecture not found")
        self.require("users", payload["user_id"], "User not found")

        values = dict(payload)
        values["is_answered"] = False
        return self.insert(values)

    def update_question(self, question_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(question_id, changes)

    def delete_question(self, question_id: str) -> None:
        self.delete(question_id)

    def list_answers(self, question_id: str) -> list[dict[str, Any]]:
        self.get(question_id)
        query = f"""
        SELECT {ANSWER_DEFINITION.select_list}
        FROM course_answers
        WHERE question_id = :question_id
        ORDER BY is_instructor_answer DESC, votes DESC, created_at ASC, id ASC
        """
        rows = self.db.fetch_all(query, {"question_id": question_id})
        return [decode_row(ANSWER_DEFINITION, row) for row in rows]


class AnswerService(ResourceService):
    """Data access for course answer endpoints."""

    definition = ANSWER_DEFINITION

    def list_answers(
        self,
        *,
        list_query: ListQuery,
        question_id: str | None,
        user_id: str | None,
        is_instructor_answer: bool | None,
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if question_id is not None:
            filters.append("question_id = :question_id")
            params["question_id"] = question_id
        if user_id is not None:
            filters.append("user_id = :user_id")
            params["user_id"] = user_id
        if is_instructor_answer is not None:
            filters.append("is_instructor_answer = :is_instructor_answer")
            params["is_instructor_answer"] = is_instructor_answer
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_answer(self, payload: dict[str, Any]) -> dict[str, Any]:
        question = self.db.fetch_one(
            "SELECT id, user_id, title FROM course_questions WHERE id = :id",
            {"id": payload["question_id"]},
        )
        if question is None:
            raise BadRequestError("Question not found")
        self.require("users", payload["user_id"], "User not found")

        answer = self.insert(payload)
        question_id = str(question["id"])
        refresh_warning = self.aggregates.refresh_question_answered(question_id)
        notify_warning = None
        # Authors are not notified about their own answers.
        if str(question["user_id"]) != str(payload["user_id"]):
            notify_warning = notify_users(
                self.db,
                user_ids=[str(question["user_id"])],
                title="Your question has a new answer",
                message=f'Someone answered your question "{question["title"]}".',
                notification_type="question_answered",
                related_id=question_id,
            )
        return write_result(answer, refresh_warning, notify_warning)

    def update_answer(self, answer_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(answer_id, changes)

    def delete_answer(self, answer_id: str) -> dict[str, Any]:
        answer = self.get(answer_id)
        self.delete(answer_id)
        return write_result(None, self.aggregates.refresh_question_answered(answer["question_id"]))
