# This file defines course announcement endpoints under the versioned API path.
# It exists so instructors can broadcast news to everyone enrolled in a course.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import ListParams, get_announcement_service, get_config, get_list_params
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.engagement_schemas import (
    AnnouncementCreate,
    AnnouncementListResponse,
    AnnouncementResponse,
    AnnouncementUpdate,
)
from src.api.services.announcement_service import ANNOUNCEMENT_DEFINITION, AnnouncementService
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

router = APIRouter(prefix="/course-announcements", tags=["announcements"])
AnnouncementServiceDep = Annotated[AnnouncementService, Depends(get_announcement_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get("", response_model=AnnouncementListResponse)
def list_announcements(
    request: Request,
    service: AnnouncementServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    course_id: str | None = Query(default=None),
    is_published: bool | None = Query(default=None),
) -> dict[str, object]:
    course = parse_optional_uuid(course_id, label="course")
    list_query = params.resolve(ANNOUNCEMENT_DEFINITION, config)
    result = service.list_announcements(list_query=list_query, course_id=course, is_published=is_published)
    return list_response(request=request, config=config, result=result, list_query=list_query)


@router.get("/{announcement_id}", response_model=AnnouncementResponse)
def get_announcement(
    announcement_id: str, request: Request, service: AnnouncementServiceDep, config: ConfigDep
) -> dict[str, object]:
    announcement = service.get(parse_uuid(announcement_id, label="announcement"))
    return object_response(request=request, config=config, data=announcement)


@router.post("", response_model=AnnouncementResponse, status_code=201)
def create_announcement(
    body: AnnouncementCreate, request: Request, service: AnnouncementServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), course_id="course")
    result = service.create_announcement(payload)
    return object_response(
        request=request,
        config=config,
        data=result["data"],
        message="Announcement created successfully",
        warnings=result["warnings"],
    )


@router.put("/{announcement_id}", response_model=AnnouncementResponse)
def update_announcement(
    announcement_id: str,
    body: AnnouncementUpdate,
    request: Request,
    service: AnnouncementServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    record_id = parse_uuid(announcement_id, label="announcement")
    announcement = service.update_announcement(record_id, body.model_dump(exclude_unset=True))
    return object_response(
        request=request, config=config, data=announcement, message="Announcement updated successfully"
    )


@router.delete("/{announcement_id}", response_model=MessageResponse)
def delete_announcement(
    announcement_id: str, request: Request, service: AnnouncementServiceDep, config: ConfigDep
) -> dict[str, object]:
    service.delete_announcement(parse_uuid(announcement_id, label="announcement"))
    return object_response(
        request=request, config=config, data=None, message="Announcement deleted successfully"
    )
