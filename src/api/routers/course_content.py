# This file defines course section and lecture endpoints under the versioned API path.
# It exists so instructors can build a course curriculum one section and lecture at a time.
# Lecture writes report a warning when the course lecture counter could not be refreshed.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import (
    ListParams,
    get_config,
    get_lecture_service,
    get_list_params,
    get_section_service,
)
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.course_schemas import (
    ContentType,
    LectureCreate,
    LectureListResponse,
    LectureResponse,
    LectureUpdate,
    SectionCreate,
    SectionListResponse,
    SectionResponse,
    SectionUpdate,
)
from src.api.services.course_content_service import (
    LECTURE_DEFINITION,
    SECTION_DEFINITION,
    CourseLectureService,
    CourseSectionService,
)
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

sections_router = APIRouter(prefix="/course-sections", tags=["curriculum"])
lectures_router = APIRouter(prefix="/course-lectures", tags=["curriculum"])
SectionServiceDep = Annotated[CourseSectionService, Depends(get_section_service)]
LectureServiceDep = Annotated[CourseLectureService, Depends(get_lecture_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@sections_router.get("", response_model=SectionListResponse)
def list_sections(
    request: Request,
    service: SectionServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    course_id: str | None = Query(default=None),
    include_lectures: bool = Query(default=False),
) -> dict[str, object]:
    course = parse_optional_uuid(course_id, label="course")
    list_query = params.resolve(SECTION_DEFINITION, config)
    result = service.list_sections(
        list_query=list_query, course_id=course, include_lectures=include_lectures
    )
    return list_response(request=request, config=config, result=result, list_query=list_query)


@sections_router.get("/{section_id}", response_model=SectionResponse)
def get_section(
    section_id: str,
    request: Request,
    service: SectionServiceDep,
    config: ConfigDep,
    include_lectures: bool = Query(default=False),
) -> dict[str, object]:
    section = service.get_section(
        parse_uuid(section_id, label="section"), include_lectures=include_lectures
    )
    return object_response(request=request, config=config, data=section)


@sections_router.post("", response_model=SectionResponse, status_code=201)
def create_section(
    body: SectionCreate, request: Request, service: SectionServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), course_id="course")
    section = service.create_section(payload)
    return object_response(request=request, config=config, data=section, message="Section created successfully")


@sections_router.put("/{section_id}", response_model=SectionResponse)
def update_section(
    section_id: str,
    body: SectionUpdate,
    request: Request,
    service: SectionServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    record_id = parse_uuid(section_id, label="section")
    section = service.update_section(record_id, body.model_dump(exclude_unset=True))
    return object_response(request=request, config=config, data=section, message="Section updated successfully")


@sections_router.delete("/{section_id}", response_model=MessageResponse)
def delete_section(
    section_id: str, request: Request, service: SectionServiceDep, config: ConfigDep
) -> dict[str, object]:
    service.delete_section(parse_uuid(section_id, label="section"))
    return object_response(request=request, config=config, data=None, message="Section deleted successfully")


@lectures_router.get("", response_model=LectureListResponse)
def list_lectures(
    request: Request,
    service: LectureServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    section_id: str | None = Query(default=None),
    content_type: ContentType | None = Query(default=None),
) -> dict[str, object]:
    section = parse_optional_uuid(section_id, label="section")
    list_query = params.resolve(LECTURE_DEFINITION, config)
    result = service.list_lectures(list_query=list_query, section_id=section, content_type=content_type)
    return list_response(request=request, config=config, result=result, list_query=list_query)


@lectures_router.get("/{lecture_id}", response_model=LectureResponse)
def get_lecture(
    lecture_id: str, request: Request, service: LectureServiceDep, config: ConfigDep
) -> dict[str, object]:
    lecture = service.get(parse_uuid(lecture_id, label="lecture"))
    return object_response(request=request, config=config, data=lecture)


@lectures_router.post("", response_model=LectureResponse, status_code=201)
def create_lecture(
    body: LectureCreate, request: Request, service: LectureServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), section_id="section")
    result = service.create_lecture(payload)
    return object_response(
        request=request,
        config=config,
        data=result["data"],
        message="Lecture created successfully",
        warnings=result["warnings"],
    )


@lectures_router.put("/{lecture_id}", response_model=LectureResponse)
def update_lecture(
    lecture_id: str,
    body: LectureUpdate,
    request: Request,
    service: LectureServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    record_id = parse_uuid(lecture_id, label="lecture")
    lecture = service.update_lecture(record_id, body.model_dump(exclude_unset=True))
    return object_response(request=request, config=config, data=lecture, message="Lecture updated successfully")


@lectures_router.delete("/{lecture_id}", response_model=MessageResponse)
def delete_lecture(
    lecture_id: str, request: Request, service: LectureServiceDep, config: ConfigDep
) -> dict[str, object]:
    result = service.delete_lecture(parse_uuid(lecture_id, label="lecture"))
    return object_response(
        request=request,
        config=config,
        data=None,
        message="Lecture deleted successfully",
        warnings=result["warnings"],
    )
