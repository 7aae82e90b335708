# This file provides the shared data access layer behind every resource endpoint.
# It exists so list/get/create/update/delete follow one set of SQL and error rules.
# A ResourceDefinition describes a table; subclasses add validation and follow-up writes.
# Rows are decoded into JSON-friendly values the same way for PostgreSQL and SQLite.

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import IntegrityError

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.error_handlers import BadRequestError, NotFoundError
from src.api.pagination import ListQuery
from src.api.services.aggregates import AggregateRefresher
from src.api.services.partial_update import PartialUpdater, conflict_from_integrity_error
from src.api.sql_builder import validate_identifier
from src.api.validation import new_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceDefinition:
    """Static description of one resource table."""

    table: str
    label: str
    columns: tuple[str, ...]
    updatable_fields: tuple[str, ...] = ()
    sort_fields: Mapping[str, str] = field(default_factory=dict)
    default_sort: str = "created_at:desc"
    bool_fields: frozenset[str] = frozenset()
    float_fields: frozenset[str] = frozenset()
    json_fields: frozenset[str] = frozenset()
    created_column: str | None = "created_at"
    touch_column: str | None = "updated_at"
    allow_touch_only: bool = False
    clearable_fields: frozenset[str] = frozenset()
    conflict_messages: Mapping[str, str] = field(default_factory=dict)

    @property
    def not_found_message(self) -> str:
        return f"{self.label} not found"

    @property
    def select_list(self) -> str:
        return ", ".join(validate_identifier(column) for column in self.columns)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def where_sql(clauses: Sequence[str]) -> str:
    return " AND ".join(["1 = 1", *clauses])


def decode_row(definition: ResourceDefinition, row: Mapping[str, Any]) -> dict[str, Any]:
    """Map store values to JSON-friendly Python values for either backend."""

    decoded: dict[str, Any] = {}
    for key, value in row.items():
        if value is None:
            decoded[key] = None
        elif key in definition.json_fields:
            decoded[key] = json.loads(value) if isinstance(value, str) else list(value)
        elif key in definition.bool_fields:
            decoded[key] = bool(value)
        elif key in definition.float_fields or isinstance(value, Decimal):
            decoded[key] = float(value)
        elif isinstance(value, uuid.UUID):
            decoded[key] = str(value)
        else:
            decoded[key] = value
    return decoded


class ResourceService:
    """Base service; subclasses set `definition` and add resource rules."""

    definition: ResourceDefinition

    def __init__(
        self,
        *,
        config: ApiConfig,
        db: DatabaseClient,
        aggregates: AggregateRefresher | None = None,
    ) -> None:
        self.config = config
        self.db = db
        self.updater = PartialUpdater(db)
        self.aggregates = aggregates or AggregateRefresher(db)
        self.table = validate_identifier(self.definition.table)

    # Row mapping

    def decode(self, row: Mapping[str, Any]) -> dict[str, Any]:
        return decode_row(self.definition, row)

    def encode(self, values: Mapping[str, Any]) -> dict[str, Any]:
        encoded = dict(values)
        for key in self.definition.json_fields:
            if key in encoded and encoded[key] is not None:
                encoded[key] = json.dumps(list(encoded[key]))
        return encoded

    # Reads

    @property
    def select_by_id_sql(self) -> str:
        return f"SELECT {self.definition.select_list} FROM {self.table} WHERE id = :id"

    def find(self, record_id: str) -> dict[str, Any] | None:
        row = self.db.fetch_one(self.select_by_id_sql, {"id": record_id})
        return self.decode(row) if row is not None else None

    def get(self, record_id: str) -> dict[str, Any]:
        record = self.find(record_id)
        if record is None:
            raise NotFoundError(self.definition.not_found_message)
        return record

    def exists(self, table: str, **conditions: Any) -> bool:
        safe_table = validate_identifier(table)
        clauses = [f"{validate_identifier(column)} = :{column}" for column in conditions]
        query = f"SELECT 1 AS found FROM {safe_table} WHERE {where_sql(clauses)} LIMIT 1"
        return self.db.fetch_one(query, conditions) is not None

    def require(self, table: str, record_id: str, message: str) -> None:
        """Raise BadRequest when a referenced record does not exist."""

        if not self.exists(table, id=record_id):
            raise BadRequestError(message)

    def count(self, table: str, **conditions: Any) -> int:
        safe_table = validate_identifier(table)
        clauses = [f"{validate_identifier(column)} = :{column}" for column in conditions]
        query = f"SELECT COUNT(*) AS total_count FROM {safe_table} WHERE {where_sql(clauses)}"
        return int(self.db.fetch_scalar(query, conditions) or 0)

    def list_records(
        self,
        *,
        list_query: ListQuery,
        filters: Sequence[str] = (),
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        where = where_sql(filters)
        base_params = dict(params or {})

        count_query = f"SELECT COUNT(*) AS total_count FROM {self.table} WHERE {where}"
        total_count = int(self.db.fetch_scalar(count_query, base_params) or 0)

        order_sql = list_query.sort.order_by(dict(self.definition.sort_fields))
        data_query = f"""
        SELECT {self.definition.select_list}
        FROM {self.table}
        WHERE {where}
        ORDER BY {order_sql}, id ASC
        LIMIT :limit OFFSET :offset
        """
        page_params = dict(base_params)
        page_params["limit"] = list_query.pagination.limit
        page_params["offset"] = list_query.pagination.offset

        rows = self.db.fetch_all(data_query, page_params)
        return {"rows": [self.decode(row) for row in rows], "total_count": total_count}

    # Writes

    def insert(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Insert one row with a fresh id and write-path timestamps, then reload it."""

        record_id = new_id()
        now = _utc_now()
        row_values: dict[str, Any] = {"id": record_id}
        # Absent optional values fall back to column defaults.
        row_values.update((key, value) for key, value in self.encode(values).items() if value is not None)
        if self.definition.created_column:
            row_values.setdefault(self.definition.created_column, now)
        if self.definition.touch_column == "updated_at":
            row_values.setdefault("updated_at", now)

        columns = [validate_identifier(column) for column in row_values]
        placeholders = ", ".join(f":{column}" for column in columns)
        query = f"INSERT INTO {self.table} ({', '.join(columns)}) VALUES ({placeholders})"
        try:
            self.db.execute(query, row_values)
        except IntegrityError as exc:
            logger.info("Insert into %s rejected by store constraint: %s", self.table, exc.orig)
            raise conflict_from_integrity_error(
                exc, table=self.table, conflict_messages=self.definition.conflict_messages
            ) from exc
        return self.get(record_id)

    def update(
        self,
        record_id: str,
        changes: Mapping[str, Any],
        *,
        clearable: Collection[str] | None = None,
    ) -> dict[str, Any]:
        """Partial update of the present fields followed by a full reload."""

        definition = self.definition
        if definition.touch_column is None:
            raise BadRequestError(f"{definition.label} records cannot be updated")
        row = self.updater.apply(
            table=self.table,
            record_id=record_id,
            changes=self.encode(changes),
            field_order=definition.updatable_fields,
            reload_sql=self.select_by_id_sql,
            not_found_message=definition.not_found_message,
            touch_column=definition.touch_column,
            clearable=definition.clearable_fields if clearable is None else clearable,
            allow_touch_only=definition.allow_touch_only,
            conflict_messages=definition.conflict_messages,
        )
        return self.decode(row)

    def delete(self, record_id: str) -> None:
        deleted = self.db.execute(f"DELETE FROM {self.table} WHERE id = :id", {"id": record_id})
        if deleted == 0:
            raise NotFoundError(self.definition.not_found_message)


def write_result(data: Any, *warnings: str | None) -> dict[str, Any]:
    """Bundle a write payload with any best-effort follow-up warnings."""

    collected = [warning for warning in warnings if warning]
    return {"data": data, "warnings": collected or None}
