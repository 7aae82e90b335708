# This file builds response envelopes for API endpoints in a consistent format.
# It exists so clients always receive version metadata, request tracing, and a success flag.
# The helpers return plain dictionaries that Pydantic response models validate at runtime.
# Warnings carry best-effort follow-up failures that did not fail the request itself.

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from fastapi import Request

from src.api.api_config import ApiConfig
from src.api.pagination import ListQuery, build_pagination_metadata


def api_version_label(api_version_path: str) -> str:
    """Convert `/api/v1` style paths into `v1` labels."""

    parts = [part for part in api_version_path.rstrip("/").split("/") if part]
    if not parts:
        raise ValueError(f"Invalid api_version_path: {api_version_path!r}")
    return parts[-1]


def build_version_fields(*, api_version_path: str, schema_version: str) -> dict[str, str]:
    return {
        "api_version": api_version_label(api_version_path),
        "schema_version": schema_version,
    }


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _base_fields(
    *,
    api_version_path: str,
    schema_version: str,
    request_id: str,
    message: str,
    warnings: Sequence[str] | None,
) -> dict[str, Any]:
    return {
        "success": True,
        "message": message,
        **build_version_fields(api_version_path=api_version_path, schema_version=schema_version),
        "request_id": request_id,
        "generated_at": utc_now(),
        "warnings": list(warnings) if warnings else None,
    }


def build_list_envelope(
    *,
    api_version_path: str,
    schema_version: str,
    request_id: str,
    data: list[dict[str, Any]],
    pagination: dict[str, Any],
    message: str = "OK",
    warnings: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Build standard list response envelope."""

    return {
        **_base_fields(
            api_version_path=api_version_path,
            schema_version=schema_version,
            request_id=request_id,
            message=message,
            warnings=warnings,
        ),
        "data": data,
        "pagination": pagination,
    }


def build_object_envelope(
    *,
    api_version_path: str,
    schema_version: str,
    request_id: str,
    data: Any,
    message: str = "OK",
    warnings: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Build standard non-list response envelope."""

    return {
        **_base_fields(
            api_version_path=api_version_path,
            schema_version=schema_version,
            request_id=request_id,
            message=message,
            warnings=warnings,
        ),
        "data": data,
    }


def object_response(
    *,
    request: Request,
    config: ApiConfig,
    data: Any,
    message: str = "OK",
    warnings: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Envelope a single payload using the request's trace id and configured versions."""

    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=data,
        message=message,
        warnings=warnings,
    )


def list_response(
    *,
    request: Request,
    config: ApiConfig,
    result: dict[str, Any],
    list_query: ListQuery,
    message: str = "OK",
) -> dict[str, Any]:
    total_count = int(result["total_count"])
    return build_list_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=list(result["rows"]),
        pagination=build_pagination_metadata(
            pagination=list_query.pagination,
            sort=list_query.sort,
            total_count=total_count,
        ),
        message=message,
        warnings=result.get("warnings"),
    )
