# This file defines tag endpoints and the course-to-tag relationship endpoints.
# It exists so clients can label courses with reusable, colored tags.
# Relationship routes live on their own router because they span /courses and /course-tags.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import ListParams, get_config, get_list_params, get_tag_service
from src.api.response_envelope import list_response, object_response
from src.api.schemas.catalog_schemas import (
    CourseTagLink,
    CourseTagResponse,
    CourseTagsResponse,
    TagCreate,
    TagListResponse,
    TagResponse,
    TagUpdate,
)
from src.api.schemas.common import MessageResponse
from src.api.services.tag_service import TAG_DEFINITION, TagService
from src.api.validation import parse_uuid

router = APIRouter(prefix="/tags", tags=["tags"])
course_tags_router = APIRouter(tags=["tags"])
TagServiceDep = Annotated[TagService, Depends(get_tag_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get("", response_model=TagListResponse)
def list_tags(
    request: Request,
    service: TagServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    search: str | None = Query(default=None),
) -> dict[str, object]:
    list_query = params.resolve(TAG_DEFINITION, config)
    result = service.list_tags(list_query=list_query, search=search)
    return list_response(request=request, config=config, result=result, list_query=list_query)


@router.get("/{tag_id}", response_model=TagResponse)
def get_tag(tag_id: str, request: Request, service: TagServiceDep, config: ConfigDep) -> dict[str, object]:
    tag = service.get(parse_uuid(tag_id, label="tag"))
    return object_response(request=request, config=config, data=tag)


@router.post("", response_model=TagResponse, status_code=201)
def create_tag(
    body: TagCreate, request: Request, service: TagServiceDep, config: ConfigDep
) -> dict[str, object]:
    tag = service.create_tag(body.model_dump())
    return object_response(request=request, config=config, data=tag, message="Tag created successfully")


@router.put("/{tag_id}", response_model=TagResponse)
def update_tag(
    tag_id: str, body: TagUpdate, request: Request, service: TagServiceDep, config: ConfigDep
) -> dict[str, object]:
    record_id = parse_uuid(tag_id, label="tag")
    tag = service.update_tag(record_id, body.model_dump(exclude_unset=True))
    return object_response(request=request, config=config, data=tag, message="Tag updated successfully")


@router.delete("/{tag_id}", response_model=MessageResponse)
def delete_tag(tag_id: str, request: Request, service: TagServiceDep, config: ConfigDep) -> dict[str, object]:
    service.delete_tag(parse_uuid(tag_id, label="tag"))
    return object_response(request=request, config=config, data=None, message="Tag deleted successfully")


@course_tags_router.get("/courses/{course_id}/tags", response_model=CourseTagsResponse)
def list_course_tags(
    course_id: str, request: Request, service: TagServiceDep, config: ConfigDep
) -> dict[str, object]:
    tags = service.list_course_tags(parse_uuid(course_id, label="course"))
    return object_response(request=request, config=config, data=tags)


@course_tags_router.post("/course-tags", response_model=CourseTagResponse, status_code=201)
def add_course_tag(
    body: CourseTagLink, request: Request, service: TagServiceDep, config: ConfigDep
) -> dict[str, object]:
    link = service.add_course_tag(
        course_id=parse_uuid(body.course_id, label="course"),
        tag_id=parse_uuid(body.tag_id, label="tag"),
    )
    return object_response(
        request=request, config=config, data=link, message="Tag added to course successfully"
    )


@course_tags_router.delete("/course-tags/remove", response_model=MessageResponse)
def remove_course_tag(
    request: Request,
    service: TagServiceDep,
    config: ConfigDep,
    course_id: str = Query(),
    tag_id: str = Query(),
) -> dict[str, object]:
    service.remove_course_tag(
        course_id=parse_uuid(course_id, label="course"),
        tag_id=parse_uuid(tag_id, label="tag"),
    )
    return object_response(
        request=request, config=config, data=None, message="Tag removed from course successfully"
    )
