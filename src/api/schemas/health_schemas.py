# This file defines response schemas for the operational health, readiness, and version endpoints.
# Every operational response shares the version and tracing fields of OperationalFields.
# Readiness lists any course marketplace tables that are still missing from the store.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class OperationalFields(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    timestamp: datetime


class HealthResponse(OperationalFields):
    status: str
    environment: str
    service_name: str


class ReadinessResponse(OperationalFields):
    db_connected: bool
    schema_ready: bool
    ready: bool
    database: str
    missing_tables: list[str] = Field(default_factory=list)


class VersionResponse(OperationalFields):
    api_version_path: str
    app_version: str
    git_commit: str | None = None
    project: str
    version: str
