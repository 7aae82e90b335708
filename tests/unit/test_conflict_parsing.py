"""
Unit tests for translating store uniqueness violations into conflicts.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from sqlalchemy.exc import IntegrityError

from src.api.error_handlers import BadRequestError, ConflictError
from src.api.services.partial_update import conflict_from_integrity_error, unique_violation_fields


def integrity_error(message: str) -> IntegrityError:
    return IntegrityError("UPDATE ...", {}, Exception(message))


def test_sqlite_single_column_violation() -> None:
    error = integrity_error("UNIQUE constraint failed: categories.slug")
    assert unique_violation_fields(error, table="categories") == ("slug",)


def test_sqlite_composite_violation() -> None:
    error = integrity_error("UNIQUE constraint failed: enrollments.user_id, enrollments.course_id")
    assert unique_violation_fields(error, table="enrollments") == ("user_id", "course_id")


def test_postgres_key_detail_violation() -> None:
    error = integrity_error(
        'duplicate key value violates unique constraint "course_reviews_user_id_course_id_key"\n'
        "DETAIL:  Key (user_id, course_id)=(a, b) already exists."
    )
    assert unique_violation_fields(error, table="course_reviews") == ("user_id", "course_id")


def test_postgres_constraint_name_without_detail() -> None:
    error = integrity_error('duplicate key value violates unique constraint "tags_name_key"')
    assert unique_violation_fields(error, table="tags") == ("name",)


def test_other_integrity_errors_are_not_conflicts() -> None:
    error = integrity_error("FOREIGN KEY constraint failed")

    assert unique_violation_fields(error, table="courses") is None
    translated = conflict_from_integrity_error(error, table="courses")
    assert isinstance(translated, BadRequestError)
    assert translated.message == "Request violates a data constraint"


def test_conflict_uses_resource_message() -> None:
    error = integrity_error("UNIQUE constraint failed: coupons.code")
    translated = conflict_from_integrity_error(
        error, table="coupons", conflict_messages={"code": "Coupon code already exists"}
    )

    assert isinstance(translated, ConflictError)
    assert translated.message == "Coupon code already exists"
    assert translated.details == {"fields": ["code"]}


def test_conflict_defaults_to_field_name_message() -> None:
    error = integrity_error("UNIQUE constraint failed: users.email")
    translated = conflict_from_integrity_error(error, table="users")

    assert translated.status_code == 409
    assert translated.message == "Email already exists"
