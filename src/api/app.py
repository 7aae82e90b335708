# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, Prometheus metrics, and optional request logging.
# Keeping bootstrap logic centralized makes deployment and testing more predictable.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import RequestResponseEndpoint

from src.api.api_config import get_api_config
from src.api.dependencies import get_database_client
from src.api.error_handlers import register_error_handlers
from src.api.routers.announcements import router as announcements_router
from src.api.routers.categories import router as categories_router
from src.api.routers.coupons import router as coupons_router
from src.api.routers.course_content import lectures_router, sections_router
from src.api.routers.courses import router as courses_router
from src.api.routers.health import router as health_router
from src.api.routers.learning import enrollments_router, progress_router
from src.api.routers.notifications import router as notifications_router
from src.api.routers.qa import answers_router, questions_router
from src.api.routers.reviews import router as reviews_router
from src.api.routers.tags import course_tags_router
from src.api.routers.tags import router as tags_router
from src.api.routers.users import profiles_router
from src.api.routers.users import router as users_router
from src.api.routers.wishlists import router as wishlists_router
from src.common.logging import configure_logging

logger = logging.getLogger(__name__)

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)

OPENAPI_TAGS = [
    {"name": "health", "description": "Service liveness, readiness, and version metadata."},
    {"name": "categories", "description": "Course category tree."},
    {"name": "tags", "description": "Tags and course-to-tag links."},
    {"name": "users", "description": "User accounts and instructor profiles."},
    {"name": "courses", "description": "Course catalog with derived rating and counters."},
    {"name": "curriculum", "description": "Course sections and lectures."},
    {"name": "learning", "description": "Enrollments and lecture progress."},
    {"name": "reviews", "description": "Course reviews that drive course ratings."},
    {"name": "questions", "description": "Course questions and answers."},
    {"name": "announcements", "description": "Course announcements."},
    {"name": "notifications", "description": "User notification inbox."},
    {"name": "coupons", "description": "Discount coupons and coupon validation."},
    {"name": "wishlists", "description": "Saved courses per user."},
]


def _route_label(request: Request) -> str:
    """Use the matched route template so IDs do not explode metric cardinality."""

    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "Versioned REST API for an online course marketplace. "
            "Partial updates write only the fields a client sends, and course ratings, "
            "counters, and answered flags are recomputed from their child records."
        ),
        version=config.app_version,
        openapi_tags=OPENAPI_TAGS,
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"

            if config.enable_request_logging:
                try:
                    db = get_database_client()
                    db.log_request(
                        table_name=config.request_log_table_name,
                        request_id=request_id,
                        path=request.url.path,
                        method=request.method,
                        status_code=response.status_code,
                        duration_ms=duration_ms,
                    )
                except SQLAlchemyError:
                    logger.warning("Failed to write request log row for %s", request_id, exc_info=True)

            return response
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        db = get_database_client()
        app.state.db_connected_at_startup = db.can_connect()
        if not app.state.db_connected_at_startup:
            logger.warning("Database is not reachable at startup")

    register_error_handlers(app)

    app.include_router(health_router)
    for resource_router in (
        categories_router,
        tags_router,
        course_tags_router,
        users_router,
        profiles_router,
        courses_router,
        sections_router,
        lectures_router,
        enrollments_router,
        progress_router,
        reviews_router,
        questions_router,
        answers_router,
        announcements_router,
        notifications_router,
        coupons_router,
        wishlists_router,
    ):
        app.include_router(resource_router, prefix=config.api_version_path)

    return app


app = create_app()
