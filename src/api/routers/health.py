# This file defines liveness, readiness, and version endpoints outside the versioned API path.
# Liveness never touches the store. Readiness requires a reachable store holding every
# marketplace table, and reports the tables that are missing when the schema is incomplete.

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.dependencies import get_config, get_database_client
from src.api.response_envelope import build_version_fields
from src.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse
from src.common.ddl import DDL_ORDER

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]

# The request log is optional; every other table must exist before serving traffic.
READINESS_TABLES: tuple[str, ...] = tuple(
    name.removesuffix(".sql") for name in DDL_ORDER if name != "api_request_log.sql"
)


def _operational_fields(request: Request, config: ApiConfig) -> dict[str, object]:
    return {
        **build_version_fields(
            api_version_path=config.api_version_path,
            schema_version=config.schema_version,
        ),
        "request_id": request.state.request_id,
        "timestamp": datetime.now(tz=UTC),
    }


def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        **_operational_fields(request, config),
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(request: Request, config: ConfigDep, db: DBDep) -> dict[str, object]:
    db_connected = db.can_connect()
    missing = [table for table in READINESS_TABLES if not db.table_exists(table)] if db_connected else []
    schema_ready = db_connected and not missing

    return {
        **_operational_fields(request, config),
        "db_connected": db_connected,
        "schema_ready": schema_ready,
        "ready": schema_ready,
        "database": "reachable" if db_connected else "unreachable",
        "missing_tables": missing,
    }


@router.get("/version", response_model=VersionResponse)
def version(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        **_operational_fields(request, config),
        "api_version_path": config.api_version_path,
        "app_version": config.app_version,
        "git_commit": _git_commit(),
        "project": config.api_name,
        "version": config.app_version,
    }
