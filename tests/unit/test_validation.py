"""
Unit tests for identifier validation and password hashing.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest

from src.api.error_handlers import BadRequestError
from src.api.services.user_service import hash_password, pwd_context
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

COURSE_ID = "2f1c7a34-5b3e-4d7a-9f0e-6c1d2b3a4e5f"


def test_parse_uuid_canonicalizes_case() -> None:
    assert parse_uuid(COURSE_ID.upper(), label="course") == COURSE_ID


@pytest.mark.parametrize("value", ["", "abc", "2f1c7a34-5b3e-4d7a-9f0e", "1; DROP TABLE users"])
def test_parse_uuid_rejects_malformed_values(value: str) -> None:
    with pytest.raises(BadRequestError, match="Invalid course ID format"):
        parse_uuid(value, label="course")


def test_parse_optional_uuid_passes_none() -> None:
    assert parse_optional_uuid(None, label="lecture") is None


def test_parse_body_ids_keeps_absent_and_null_ids() -> None:
    payload = {"course_id": COURSE_ID.upper(), "lecture_id": None, "title": "Why?"}

    parse_body_ids(payload, course_id="course", lecture_id="lecture", user_id="user")

    assert payload == {"course_id": COURSE_ID, "lecture_id": None, "title": "Why?"}


def test_parse_body_ids_names_offending_field() -> None:
    with pytest.raises(BadRequestError, match="Invalid lecture ID format"):
        parse_body_ids({"lecture_id": "nope"}, lecture_id="lecture")


def test_password_hash_is_salted_and_verifiable() -> None:
    first = hash_password("secret123")
    second = hash_password("secret123")

    assert first != second
    assert first != "secret123"
    assert pwd_context.verify("secret123", first)
    assert not pwd_context.verify("wrong-password", first)
