# This file defines notification endpoints under the versioned API path.
# It exists so clients can read a user's inbox and mark entries as read.
# `mark-all-read` is declared before `/{notification_id}` so it is never parsed as an ID.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import ListParams, get_config, get_list_params, get_notification_service
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.engagement_schemas import (
    MarkAllReadRequest,
    MarkAllReadResponse,
    NotificationCreate,
    NotificationListResponse,
    NotificationResponse,
    NotificationUpdate,
)
from src.api.services.notification_service import NOTIFICATION_DEFINITION, NotificationService
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

router = APIRouter(prefix="/notifications", tags=["notifications"])
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    request: Request,
    service: NotificationServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    user_id: str | None = Query(default=None),
    notification_type: str | None = Query(default=None, alias="type"),
    is_read: bool | None = Query(default=None),
) -> dict[str, object]:
    user = parse_optional_uuid(user_id, label="user")
    list_query = params.resolve(NOTIFICATION_DEFINITION, config)
    result = service.list_notifications(
        list_query=list_query, user_id=user, notification_type=notification_type, is_read=is_read
    )
    return list_response(request=request, config=config, result=result, list_query=list_query)


@router.put("/mark-all-read", response_model=MarkAllReadResponse)
def mark_all_read(
    body: MarkAllReadRequest, request: Request, service: NotificationServiceDep, config: ConfigDep
) -> dict[str, object]:
    result = service.mark_all_read(parse_uuid(body.user_id, label="user"))
    return object_response(
        request=request, config=config, data=result, message="All notifications marked as read"
    )


@router.get("/{notification_id}", response_model=NotificationResponse)
def get_notification(
    notification_id: str, request: Request, service: NotificationServiceDep, config: ConfigDep
) -> dict[str, object]:
    notification = service.get(parse_uuid(notification_id, label="notification"))
    return object_response(request=request, config=config, data=notification)


@router.post("", response_model=NotificationResponse, status_code=201)
def create_notification(
    body: NotificationCreate, request: Request, service: NotificationServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), user_id="user", related_id="related record")
    notification = service.create_notification(payload)
    return object_response(
        request=request, config=config, data=notification, message="Notification created successfully"
    )


@router.put("/{notification_id}", response_model=NotificationResponse)
def update_notification(
    notification_id: str,
    body: NotificationUpdate,
    request: Request,
    service: NotificationServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    record_id = parse_uuid(notification_id, label="notification")
    notification = service.update_notification(record_id, body.model_dump(exclude_unset=True))
    return object_response(
        request=request, config=config, data=notification, message="Notification updated successfully"
    )


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: str, request: Request, service: NotificationServiceDep, config: ConfigDep
) -> dict[str, object]:
    service.delete(parse_uuid(notification_id, label="notification"))
    return object_response(
        request=request, config=config, data=None, message="Notification deleted successfully"
    )
