# This file validates identifiers received in paths, query strings, and bodies.
# It exists so malformed IDs are rejected before any store call is made.
# IDs are normalized to the canonical lowercase UUID text form used by the store.

from __future__ import annotations

import uuid
from typing import Any

from src.api.error_handlers import BadRequestError


def parse_uuid(value: str, *, label: str) -> str:
    """Return canonical UUID text or raise `Invalid <label> ID format`."""

    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError) as exc:
        raise BadRequestError(f"Invalid {label} ID format") from exc


def parse_optional_uuid(value: str | None, *, label: str) -> str | None:
    if value is None:
        return None
    return parse_uuid(value, label=label)


def new_id() -> str:
    return str(uuid.uuid4())


def parse_body_ids(payload: dict[str, Any], **labels: str) -> dict[str, Any]:
    """Canonicalize the named ID fields of a request body in place; absent or null IDs are kept."""

    for key, label in labels.items():
        if payload.get(key) is not None:
            payload[key] = parse_uuid(payload[key], label=label)
    return payload
