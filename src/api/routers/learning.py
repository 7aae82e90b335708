# This file defines enrollment and lecture progress endpoints under the versioned API path.
# It exists so clients can record who takes which course and how far they have got.
# An enrollment update with an empty body is a valid "last accessed" ping.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import (
    ListParams,
    get_config,
    get_enrollment_service,
    get_list_params,
    get_progress_service,
)
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.learning_schemas import (
    EnrollmentCreate,
    EnrollmentListResponse,
    EnrollmentResponse,
    EnrollmentUpdate,
    LectureProgressCreate,
    LectureProgressListResponse,
    LectureProgressResponse,
    LectureProgressUpdate,
)
from src.api.services.enrollment_service import (
    ENROLLMENT_DEFINITION,
    PROGRESS_DEFINITION,
    EnrollmentService,
    LectureProgressService,
)
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

enrollments_router = APIRouter(prefix="/enrollments", tags=["learning"])
progress_router = APIRouter(prefix="/lecture-progress", tags=["learning"])
EnrollmentServiceDep = Annotated[EnrollmentService, Depends(get_enrollment_service)]
ProgressServiceDep = Annotated[LectureProgressService, Depends(get_progress_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@enrollments_router.get("", response_model=EnrollmentListResponse)
def list_enrollments(
    request: Request,
    service: EnrollmentServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    user_id: str | None = Query(default=None),
    course_id: str | None = Query(default=None),
    is_completed: bool | None = Query(default=None),
) -> dict[str, object]:
    user = parse_optional_uuid(user_id, label="user")
    course = parse_optional_uuid(course_id, label="course")
    list_query = params.resolve(ENROLLMENT_DEFINITION, config)
    result = service.list_enrollments(
        list_query=list_query, user_id=user, course_id=course, is_completed=is_completed
    )
    return list_response(request=request, config=config, result=result, list_query=list_query)


@enrollments_router.get("/{enrollment_id}", response_model=EnrollmentResponse)
def get_enrollment(
    enrollment_id: str, request: Request, service: EnrollmentServiceDep, config: ConfigDep
) -> dict[str, object]:
    enrollment = service.get(parse_uuid(enrollment_id, label="enrollment"))
    return object_response(request=request, config=config, data=enrollment)


@enrollments_router.post("", response_model=EnrollmentResponse, status_code=201)
def create_enrollment(
    body: EnrollmentCreate, request: Request, service: EnrollmentServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), user_id="user", course_id="course")
    result = service.create_enrollment(payload)
    return object_response(
        request=request,
        config=config,
        data=result["data"],
        message="Enrollment created successfully",
        warnings=result["warnings"],
    )


@enrollments_router.put("/{enrollment_id}", response_model=EnrollmentResponse)
def update_enrollment(
    enrollment_id: str,
    body: EnrollmentUpdate,
    request: Request,
    service: EnrollmentServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    record_id = parse_uuid(enrollment_id, label="enrollment")
    enrollment = service.update_enrollment(record_id, body.model_dump(exclude_unset=True))
    return object_response(
        request=request, config=config, data=enrollment, message="Enrollment updated successfully"
    )


@enrollments_router.delete("/{enrollment_id}", response_model=MessageResponse)
def delete_enrollment(
    enrollment_id: str, request: Request, service: EnrollmentServiceDep, config: ConfigDep
) -> dict[str, object]:
    result = service.delete_enrollment(parse_uuid(enrollment_id, label="enrollment"))
    return object_response(
        request=request,
        config=config,
        data=None,
        message="Enrollment deleted successfully",
        warnings=result["warnings"],
    )


@progress_router.get("", response_model=LectureProgressListResponse)
def list_lecture_progress(
    request: Request,
    service: ProgressServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    user_id: str | None = Query(default=None),
    lecture_id: str | None = Query(default=None),
    is_completed: bool | None = Query(default=None),
) -> dict[str, object]:
    user = parse_optional_uuid(user_id, label="user")
    lecture = parse_optional_uuid(lecture_id, label="lecture")
    list_query = params.resolve(PROGRESS_DEFINITION, config)
    result = service.list_progress(
        list_query=list_query, user_id=user, lecture_id=lecture, is_completed=is_completed
    )
    return list_response(request=request, config=config, result=result, list_query=list_query)


@progress_router.get("/{progress_id}", response_model=LectureProgressResponse)
def get_lecture_progress(
    progress_id: str, request: Request, service: ProgressServiceDep, config: ConfigDep
) -> dict[str, object]:
    progress = service.get(parse_uuid(progress_id, label="lecture progress"))
    return object_response(request=request, config=config, data=progress)


@progress_router.post("", response_model=LectureProgressResponse, status_code=201)
def create_lecture_progress(
    body: LectureProgressCreate, request: Request, service: ProgressServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), user_id="user", lecture_id="lecture")
    progress = service.create_progress(payload)
    return object_response(
        request=request, config=config, data=progress, message="Lecture progress created successfully"
    )


@progress_router.put("/{progress_id}", response_model=LectureProgressResponse)
def update_lecture_progress(
    progress_id: str,
    body: LectureProgressUpdate,
    request: Request,
    service: ProgressServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    record_id = parse_uuid(progress_id, label="lecture progress")
    progress = service.update_progress(record_id, body.model_dump(exclude_unset=True))
    return object_response(
        request=request, config=config, data=progress, message="Lecture progress updated successfully"
    )


@progress_router.delete("/{progress_id}", response_model=MessageResponse)
def delete_lecture_progress(
    progress_id: str, request: Request, service: ProgressServiceDep, config: ConfigDep
) -> dict[str, object]:
    service.delete(parse_uuid(progress_id, label="lecture progress"))
    return object_response(
        request=request, config=config, data=None, message="Lecture progress deleted successfully"
    )
