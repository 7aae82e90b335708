# This file defines shared schema pieces reused by every resource endpoint.
# It exists so envelope metadata, pagination, and error payloads stay consistent.
# Resource schema modules extend EnvelopeFields with their own `data` payloads.
# These classes are also used by tests to validate response shape stability.

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class PaginationMetadata(BaseModel):
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total_count: int = Field(ge=0)
    total_pages: int = Field(ge=0)
    sort: str


class EnvelopeFields(BaseModel):
    success: bool = True
    message: str
    api_version: str
    schema_version: str
    request_id: str
    generated_at: datetime
    warnings: list[str] | None = None


class MessageResponse(EnvelopeFields):
    data: Any | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime
