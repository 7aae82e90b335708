"""
Unit tests for the partial UPDATE builder.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from datetime import UTC, datetime

import pytest

from src.api.error_handlers import NoFieldsToUpdateError
from src.api.sql_builder import build_partial_update, select_changes

SECTION_FIELDS = ("title", "description", "sort_order")
TOUCHED = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def test_fields_follow_declaration_order_not_payload_order() -> None:
    statement = build_partial_update(
        table="sections",
        record_id="sec-1",
        changes={"sort_order": 2, "title": "Basics"},
        field_order=SECTION_FIELDS,
        touched_at=TOUCHED,
    )

    assert statement.sql == (
        "UPDATE sections SET title = :p1, sort_order = :p2, updated_at = :p3 WHERE id = :p4"
    )
    assert statement.fields == ("title", "sort_order")
    assert statement.ordered_values == ["Basics", 2, TOUCHED, "sec-1"]


def test_single_field_uses_three_placeholders() -> None:
    statement = build_partial_update(
        table="sections",
        record_id="sec-1",
        changes={"sort_order": 0},
        field_order=SECTION_FIELDS,
        touched_at=TOUCHED,
    )

    assert statement.sql == "UPDATE sections SET sort_order = :p1, updated_at = :p2 WHERE id = :p3"
    # zero and other falsy values are still present
    assert statement.params["p1"] == 0


def test_none_values_are_treated_as_absent() -> None:
    statement = build_partial_update(
        table="sections",
        record_id="sec-1",
        changes={"title": None, "description": "", "sort_order": None},
        field_order=SECTION_FIELDS,
        touched_at=TOUCHED,
    )

    assert statement.fields == ("description",)
    assert statement.params["p1"] == ""


def test_clearable_fields_keep_explicit_none() -> None:
    selected = select_changes(
        {"completed_at": None, "is_completed": None},
        field_order=("is_completed", "completed_at"),
        clearable={"completed_at"},
    )

    assert selected == [("completed_at", None)]


def test_no_present_fields_raises() -> None:
    with pytest.raises(NoFieldsToUpdateError) as excinfo:
        build_partial_update(
            table="sections",
            record_id="sec-1",
            changes={"title": None},
            field_order=SECTION_FIELDS,
            touched_at=TOUCHED,
        )

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "No fields to update"


def test_touch_only_update_when_allowed() -> None:
    statement = build_partial_update(
        table="enrollments",
        record_id="enr-1",
        changes={},
        field_order=("progress", "completed_at"),
        touched_at=TOUCHED,
        touch_column="last_accessed_at",
        allow_touch_only=True,
    )

    assert statement.sql == "UPDATE enrollments SET last_accessed_at = :p1 WHERE id = :p2"
    assert statement.fields == ()


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(ValueError, match="not updatable: rating"):
        select_changes({"rating": 5}, field_order=SECTION_FIELDS)


def test_unsafe_identifier_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsafe SQL identifier"):
        build_partial_update(
            table="sections; DROP TABLE users",
            record_id="sec-1",
            changes={"title": "x"},
            field_order=SECTION_FIELDS,
            touched_at=TOUCHED,
        )
