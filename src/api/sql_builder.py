# This file assembles parameterized UPDATE statements for partial resource updates.
# It exists so every resource shares one deterministic rule for which columns are written.
# Column names come from developer-owned field lists and are validated as identifiers.
# Values are always bound parameters; nothing caller-supplied is interpolated into SQL text.

from __future__ import annotations

import re
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.api.error_handlers import NoFieldsToUpdateError

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def validate_identifier(identifier: str) -> str:
    if not _IDENTIFIER_RE.match(identifier):
        raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
    return identifier


@dataclass(frozen=True)
class UpdateStatement:
    """A rendered UPDATE plus the bound values it needs."""

    sql: str
    params: dict[str, Any]
    fields: tuple[str, ...]

    @property
    def ordered_values(self) -> list[Any]:
        """Bound values in placeholder order (changed fields, timestamp, identifier)."""

        return [self.params[f"p{index}"] for index in range(1, len(self.params) + 1)]


def select_changes(
    changes: Mapping[str, Any],
    *,
    field_order: Sequence[str],
    clearable: Collection[str] = (),
) -> list[tuple[str, Any]]:
    """Pick present fields in declaration order.

    A field is present when its key exists with a non-None value. Keys listed in
    `clearable` are kept even when None so the column can be reset to NULL.
    """

    unknown = set(changes) - set(field_order)
    if unknown:
        raise ValueError(f"Fields are not updatable: {', '.join(sorted(unknown))}")

    selected: list[tuple[str, Any]] = []
    for field in field_order:
        if field not in changes:
            continue
        value = changes[field]
        if value is None and field not in clearable:
            continue
        selected.append((field, value))
    return selected


def build_partial_update(
    *,
    table: str,
    record_id: Any,
    changes: Mapping[str, Any],
    field_order: Sequence[str],
    touched_at: datetime,
    touch_column: str = "updated_at",
    id_column: str = "id",
    clearable: Collection[str] = (),
    allow_touch_only: bool = False,
) -> UpdateStatement:
    """Build `UPDATE table SET f1 = :p1, ..., touch = :pN+1 WHERE id = :pN+2`.

    Raises NoFieldsToUpdateError when nothing is present, unless the resource
    accepts an update that only refreshes its touch column.
    """

    safe_table = validate_identifier(table)
    safe_touch = validate_identifier(touch_column)
    safe_id = validate_identifier(id_column)

    selected = select_changes(changes, field_order=field_order, clearable=clearable)
    if not selected and not allow_touch_only:
        raise NoFieldsToUpdateError()

    assignments: list[str] = []
    params: dict[str, Any] = {}
    for position, (field, value) in enumerate(selected, start=1):
        assignments.append(f"{validate_identifier(field)} = :p{position}")
        params[f"p{position}"] = value

    touch_position = len(selected) + 1
    assignments.append(f"{safe_touch} = :p{touch_position}")
    params[f"p{touch_position}"] = touched_at

    id_position = touch_position + 1
    params[f"p{id_position}"] = record_id

    sql = f"UPDATE {safe_table} SET {', '.join(assignments)} WHERE {safe_id} = :p{id_position}"
    return UpdateStatement(
        sql=sql,
        params=params,
        fields=tuple(field for field, _ in selected),
    )
