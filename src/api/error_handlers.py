# This file defines consistent API error payloads and exception handlers.
# It exists so every endpoint returns the same error shape with request trace fields.
# The error classes mirror the client-visible taxonomy: bad request, not found, conflict,
# no fields to update, and store failures. Handlers translate them into safe JSON bodies.

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Domain error type with structured API details."""

    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)


class BadRequestError(APIError):
    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(status_code=400, error_code="BAD_REQUEST", message=message, details=details)


class NotFoundError(APIError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=404, error_code="NOT_FOUND", message=message)


class ConflictError(APIError):
    """Uniqueness violation; `fields` names the column(s) that collided."""

    def __init__(self, message: str, *, fields: Sequence[str] = ()) -> None:
        self.fields = tuple(fields)
        super().__init__(
            status_code=409,
            error_code="CONFLICT",
            message=message,
            details={"fields": list(self.fields)} if self.fields else None,
        )


class NoFieldsToUpdateError(APIError):
    def __init__(self, message: str = "No fields to update") -> None:
        super().__init__(status_code=400, error_code="NO_FIELDS_TO_UPDATE", message=message)


class InternalStoreError(APIError):
    def __init__(self, message: str = "The data store failed to process the request.") -> None:
        super().__init__(status_code=500, error_code="INTERNAL_STORE_ERROR", message=message)


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_body(
    *, request: Request, error_code: str, message: str, details: Any | None = None
) -> dict[str, Any]:
    return {
        "success": False,
        "error_code": error_code,
        "message": message,
        "details": jsonable_encoder(details),
        "request_id": _request_id(request),
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code=exc.error_code,
                message=exc.message,
                details=exc.details,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                request=request,
                error_code="VALIDATION_ERROR",
                message="Invalid request parameters.",
                details=exc.errors(),
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code="HTTP_ERROR",
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("Unhandled store error on %s %s", request.method, request.url.path, exc_info=exc)
        error = InternalStoreError()
        return JSONResponse(
            status_code=error.status_code,
            content=_error_body(request=request, error_code=error.error_code, message=error.message),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request=request,
                error_code="INTERNAL_SERVER_ERROR",
                message="The server encountered an unexpected error.",
            ),
        )
