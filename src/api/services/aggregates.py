# This file recomputes denormalized aggregates stored on parent records.
# It exists so course ratings, counters, and the question answered flag follow their children.
# Every refresh is a single UPDATE that rereads the full child set, so racing writers converge.
# Failures are logged and returned as warnings; the triggering child write has already committed.

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError

from src.api.db_access import DatabaseClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateSpec:
    name: str
    parent_table: str
    assignments: str


COURSE_REVIEW_STATS = AggregateSpec(
    name="course review stats",
    parent_table="courses",
    assignments="""
        rating = COALESCE((
            SELECT ROUND(AVG(r.rating), 2)
            FROM course_reviews r
            WHERE r.course_id = :parent_id AND r.is_approved = TRUE
        ), 0),
        total_reviews = (
            SELECT COUNT(*)
            FROM course_reviews r
            WHERE r.course_id = :parent_id AND r.is_approved = TRUE
        )
    """,
)

COURSE_STUDENT_COUNT = AggregateSpec(
    name="course student count",
    parent_table="courses",
    assignments="""
        total_students = (
            SELECT COUNT(*) FROM enrollments e WHERE e.course_id = :parent_id
        )
    """,
)

COURSE_LECTURE_COUNT = AggregateSpec(
    name="course lecture count",
    parent_table="courses",
    assignments="""
        total_lectures = (
            SELECT COUNT(*)
            FROM course_lectures l
            JOIN course_sections s ON s.id = l.section_id
            WHERE s.course_id = :parent_id
        )
    """,
)

QUESTION_ANSWERED = AggregateSpec(
    name="question answered flag",
    parent_table="course_questions",
    assignments="""
        is_answered = EXISTS (
            SELECT 1 FROM course_answers a WHERE a.question_id = :parent_id
        )
    """,
)


class AggregateRefresher:
    """Best-effort recompute of parent aggregates after child writes."""

    def __init__(self, db: DatabaseClient) -> None:
        self.db = db

    def refresh(self, spec: AggregateSpec, parent_id: str) -> str | None:
        """Recompute one aggregate; return a warning message when it could not be applied."""

        query = f"""
        UPDATE {spec.parent_table}
        SET {spec.assignments.strip()},
            updated_at = :updated_at
        WHERE id = :parent_id
        """
        try:
            self.db.execute(query, {"parent_id": parent_id, "updated_at": datetime.now(tz=UTC)})
        except SQLAlchemyError:
            logger.warning(
                "Failed to refresh %s for %s %s",
                spec.name,
                spec.parent_table,
                parent_id,
                exc_info=True,
            )
            return f"Failed to refresh {spec.name}; the value may be stale until the next change."
        return None

    def refresh_course_reviews(self, course_id: str) -> str | None:
        return self.refresh(COURSE_REVIEW_STATS, course_id)

    def refresh_course_students(self, course_id: str) -> str | None:
        return self.refresh(COURSE_STUDENT_COUNT, course_id)

    def refresh_course_lectures(self, course_id: str) -> str | None:
        return self.refresh(COURSE_LECTURE_COUNT, course_id)

    def refresh_question_answered(self, question_id: str) -> str | None:
        return self.refresh(QUESTION_ANSWERED, question_id)
