# This file applies partial updates against one identified record and reloads it.
# It exists so every resource runs the same write path: one UPDATE, then one SELECT.
# Uniqueness violations are translated into conflicts that name the colliding field.
# The reloaded row is returned as stored, so callers always see the complete record.

from __future__ import annotations

import logging
import re
from collections.abc import Collection, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError

from src.api.db_access import DatabaseClient
from src.api.error_handlers import BadRequestError, ConflictError, NotFoundError
from src.api.sql_builder import build_partial_update

logger = logging.getLogger(__name__)

# PostgreSQL: DETAIL:  Key (user_id, course_id)=(...) already exists.
_PG_KEY_RE = re.compile(r"Key \(([^)]+)\)=")
# PostgreSQL: duplicate key value violates unique constraint "categories_slug_key"
_PG_CONSTRAINT_RE = re.compile(r'unique constraint "([^"]+)"')
# SQLite: UNIQUE constraint failed: enrollments.user_id, enrollments.course_id
_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: ([^\n]+)")


def unique_violation_fields(error: IntegrityError, *, table: str) -> tuple[str, ...] | None:
    """Return the columns behind a uniqueness violation, or None for other integrity errors."""

    message = str(error.orig) if error.orig is not None else str(error)

    match = _SQLITE_UNIQUE_RE.search(message)
    if match:
        columns = [part.strip().split(".")[-1] for part in match.group(1).split(",")]
        return tuple(column for column in columns if column)

    if "duplicate key" not in message and "unique constraint" not in message.lower():
        return None

    match = _PG_KEY_RE.search(message)
    if match:
        return tuple(part.strip() for part in match.group(1).split(","))

    match = _PG_CONSTRAINT_RE.search(message)
    if match:
        constraint = match.group(1)
        prefix = f"{table}_"
        if constraint.startswith(prefix) and constraint.endswith("_key"):
            return (constraint[len(prefix) : -len("_key")],)
    return ()


def conflict_from_integrity_error(
    error: IntegrityError,
    *,
    table: str,
    conflict_messages: Mapping[str, str] | None = None,
) -> BadRequestError | ConflictError:
    """Translate a store integrity failure into a client-facing error."""

    fields = unique_violation_fields(error, table=table)
    if fields is None:
        return BadRequestError("Request violates a data constraint")

    messages = conflict_messages or {}
    key = ",".join(fields)
    message = messages.get(key)
    if message is None and len(fields) == 1:
        message = f"{fields[0].replace('_', ' ').capitalize()} already exists"
    return ConflictError(message or "Record already exists", fields=fields)


class PartialUpdater:
    """Runs the partial update write path against the injected store client."""

    def __init__(self, db: DatabaseClient) -> None:
        self.db = db

    def apply(
        self,
        *,
        table: str,
        record_id: Any,
        changes: Mapping[str, Any],
        field_order: Sequence[str],
        reload_sql: str,
        not_found_message: str,
        touch_column: str = "updated_at",
        clearable: Collection[str] = (),
        allow_touch_only: bool = False,
        conflict_messages: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        statement = build_partial_update(
            table=table,
            record_id=record_id,
            changes=changes,
            field_order=field_order,
            touched_at=datetime.now(tz=UTC),
            touch_column=touch_column,
            clearable=clearable,
            allow_touch_only=allow_touch_only,
        )

        try:
            updated = self.db.execute(statement.sql, statement.params)
        except IntegrityError as exc:
            logger.info("Update on %s rejected by store constraint: %s", table, exc.orig)
            raise conflict_from_integrity_error(
                exc, table=table, conflict_messages=conflict_messages
            ) from exc

        if updated == 0:
            raise NotFoundError(not_found_message)

        row = self.db.fetch_one(reload_sql, {"id": record_id})
        if row is None:
            raise NotFoundError(not_found_message)
        return row
