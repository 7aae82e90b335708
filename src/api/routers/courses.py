# This file defines course endpoints under the versioned API path.
# It exists so clients can browse, filter, and maintain the course catalog.
# Counters such as rating and total_students are read-only here; child writes maintain them.
# Review statistics are computed on read from approved reviews.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import ListParams, get_config, get_course_service, get_list_params
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.course_schemas import (
    CourseCreate,
    CourseLevel,
    CourseListResponse,
    CourseResponse,
    CourseStatus,
    CourseUpdate,
    ReviewStatsResponse,
)
from src.api.services.course_service import COURSE_DEFINITION, CourseService
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

router = APIRouter(prefix="/courses", tags=["courses"])
CourseServiceDep = Annotated[CourseService, Depends(get_course_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get("", response_model=CourseListResponse)
def list_courses(
    request: Request,
    service: CourseServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    category_id: str | None = Query(default=None),
    instructor_id: str | None = Query(default=None),
    level: CourseLevel | None = Query(default=None),
    status: CourseStatus | None = Query(default=None),
    search: str | None = Query(default=None),
) -> dict[str, object]:
    category = parse_optional_uuid(category_id, label="category")
    instructor = parse_optional_uuid(instructor_id, label="instructor")
    list_query = params.resolve(COURSE_DEFINITION, config)
    result = service.list_courses(
        list_query=list_query,
        category_id=category,
        instructor_id=instructor,
        level=level,
        status=status,
        search=search,
    )
    return list_response(request=request, config=config, result=result, list_query=list_query)


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(course_id: str, request: Request, service: CourseServiceDep, config: ConfigDep) -> dict[str, object]:
    course = service.get(parse_uuid(course_id, label="course"))
    return object_response(request=request, config=config, data=course)


@router.get("/{course_id}/review-stats", response_model=ReviewStatsResponse)
def get_course_review_stats(
    course_id: str, request: Request, service: CourseServiceDep, config: ConfigDep
) -> dict[str, object]:
    stats = service.get_review_stats(parse_uuid(course_id, label="course"))
    return object_response(request=request, config=config, data=stats)


@router.post("", response_model=CourseResponse, status_code=201)
def create_course(
    body: CourseCreate, request: Request, service: CourseServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), instructor_id="instructor", category_id="category")
    course = service.create_course(payload)
    return object_response(request=request, config=config, data=course, message="Course created successfully")


@router.put("/{course_id}", response_model=CourseResponse)
def update_course(
    course_id: str, body: CourseUpdate, request: Request, service: CourseServiceDep, config: ConfigDep
) -> dict[str, object]:
    record_id = parse_uuid(course_id, label="course")
    changes = parse_body_ids(body.model_dump(exclude_unset=True), category_id="category")
    course = service.update_course(record_id, changes)
    return object_response(request=request, config=config, data=course, message="Course updated successfully")


@router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(course_id: str, request: Request, service: CourseServiceDep, config: ConfigDep) -> dict[str, object]:
    service.delete_course(parse_uuid(course_id, label="course"))
    return object_response(request=request, config=config, data=None, message="Course deleted successfully")
