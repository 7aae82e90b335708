# This file provides dependency factories for FastAPI routes and middleware.
# It exists so services are created once and shared through dependency injection.
# The setup keeps routers thin and makes endpoint tests easy to override.
# Centralized construction also ensures one consistent API configuration and pool are used.

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from fastapi import Query

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.pagination import ListQuery, resolve_list_query
from src.api.services.announcement_service import AnnouncementService
from src.api.services.category_service import CategoryService
from src.api.services.coupon_service import CouponService
from src.api.services.course_content_service import CourseLectureService, CourseSectionService
from src.api.services.course_service import CourseService
from src.api.services.enrollment_service import EnrollmentService, LectureProgressService
from src.api.services.notification_service import NotificationService
from src.api.services.qa_service import AnswerService, QuestionService
from src.api.services.resource_service import ResourceDefinition
from src.api.services.review_service import CourseReviewService
from src.api.services.tag_service import TagService
from src.api.services.user_service import InstructorProfileService, UserService
from src.api.services.wishlist_service import WishlistService


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(
        database_url=config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout_seconds,
        pool_recycle=config.db_pool_recycle_seconds,
    )


@lru_cache(maxsize=1)
def get_category_service() -> CategoryService:
    return CategoryService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_tag_service() -> TagService:
    return TagService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_user_service() -> UserService:
    return UserService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_instructor_profile_service() -> InstructorProfileService:
    return InstructorProfileService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_course_service() -> CourseService:
    return CourseService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_section_service() -> CourseSectionService:
    return CourseSectionService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_lecture_service() -> CourseLectureService:
    return CourseLectureService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_enrollment_service() -> EnrollmentService:
    return EnrollmentService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_progress_service() -> LectureProgressService:
    return LectureProgressService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_review_service() -> CourseReviewService:
    return CourseReviewService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_question_service() -> QuestionService:
    return QuestionService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_answer_service() -> AnswerService:
    return AnswerService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_coupon_service() -> CouponService:
    return CouponService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_announcement_service() -> AnnouncementService:
    return AnnouncementService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_notification_service() -> NotificationService:
    return NotificationService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_wishlist_service() -> WishlistService:
    return WishlistService(config=get_api_config(), db=get_database_client())


def get_config() -> ApiConfig:
    return get_api_config()


@dataclass(frozen=True)
class ListParams:
    """Raw page/limit/sort query values, validated per resource."""

    page: int | None
    limit: int | None
    sort: str | None

    def resolve(self, definition: ResourceDefinition, config: ApiConfig) -> ListQuery:
        return resolve_list_query(
            page=self.page,
            limit=self.limit,
            sort=self.sort,
            sort_fields=definition.sort_fields,
            default_sort=definition.default_sort,
            default_page_size=config.default_page_size,
            max_page_size=config.max_page_size,
        )


def get_list_params(
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    sort: str | None = Query(default=None, description="field:asc|desc"),
) -> ListParams:
    return ListParams(page=page, limit=limit, sort=sort)
