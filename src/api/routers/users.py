# This file defines user and instructor profile endpoints under the versioned API path.
# It exists so clients can manage accounts and the teaching profiles attached to them.
# User responses never include the password hash.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import (
    ListParams,
    get_config,
    get_instructor_profile_service,
    get_list_params,
    get_notification_service,
    get_user_service,
)
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.user_schemas import (
    InstructorProfileCreate,
    InstructorProfileListResponse,
    InstructorProfileResponse,
    InstructorProfileUpdate,
    NotificationStatsResponse,
    UserCreate,
    UserListResponse,
    UserResponse,
    UserRole,
    UserUpdate,
)
from src.api.services.notification_service import NotificationService
from src.api.services.user_service import (
    INSTRUCTOR_PROFILE_DEFINITION,
    USER_DEFINITION,
    InstructorProfileService,
    UserService,
)
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

router = APIRouter(prefix="/users", tags=["users"])
profiles_router = APIRouter(prefix="/instructor-profiles", tags=["users"])
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProfileServiceDep = Annotated[InstructorProfileService, Depends(get_instructor_profile_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get("", response_model=UserListResponse)
def list_users(
    request: Request,
    service: UserServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    role: UserRole | None = Query(default=None),
    search: str | None = Query(default=None),
) -> dict[str, object]:
    list_query = params.resolve(USER_DEFINITION, config)
    result = service.list_users(list_query=list_query, role=role, search=search)
    return list_response(request=request, config=config, result=result, list_query=list_query)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, request: Request, service: UserServiceDep, config: ConfigDep) -> dict[str, object]:
    user = service.get(parse_uuid(user_id, label="user"))
    return object_response(request=request, config=config, data=user)


@router.get("/{user_id}/notification-stats", response_model=NotificationStatsResponse)
def get_notification_stats(
    user_id: str, request: Request, service: NotificationServiceDep, config: ConfigDep
) -> dict[str, object]:
    stats = service.get_stats(parse_uuid(user_id, label="user"))
    return object_response(request=request, config=config, data=stats)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(
    body: UserCreate, request: Request, service: UserServiceDep, config: ConfigDep
) -> dict[str, object]:
    user = service.create_user(body.model_dump())
    return object_response(request=request, config=config, data=user, message="User created successfully")


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str, body: UserUpdate, request: Request, service: UserServiceDep, config: ConfigDep
) -> dict[str, object]:
    record_id = parse_uuid(user_id, label="user")
    user = service.update_user(record_id, body.model_dump(exclude_unset=True))
    return object_response(request=request, config=config, data=user, message="User updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, request: Request, service: UserServiceDep, config: ConfigDep) -> dict[str, object]:
    result = service.delete_user(parse_uuid(user_id, label="user"))
    return object_response(
        request=request,
        config=config,
        data=None,
        message="User deleted successfully",
        warnings=result["warnings"],
    )


@profiles_router.get("", response_model=InstructorProfileListResponse)
def list_instructor_profiles(
    request: Request,
    service: ProfileServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    is_approved: bool | None = Query(default=None),
    user_id: str | None = Query(default=None),
) -> dict[str, object]:
    user = parse_optional_uuid(user_id, label="user")
    list_query = params.resolve(INSTRUCTOR_PROFILE_DEFINITION, config)
    result = service.list_profiles(list_query=list_query, is_approved=is_approved, user_id=user)
    return list_response(request=request, config=config, result=result, list_query=list_query)


@profiles_router.get("/{profile_id}", response_model=InstructorProfileResponse)
def get_instructor_profile(
    profile_id: str, request: Request, service: ProfileServiceDep, config: ConfigDep
) -> dict[str, object]:
    profile = service.get(parse_uuid(profile_id, label="instructor profile"))
    return object_response(request=request, config=config, data=profile)


@profiles_router.post("", response_model=InstructorProfileResponse, status_code=201)
def create_instructor_profile(
    body: InstructorProfileCreate, request: Request, service: ProfileServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), user_id="user")
    profile = service.create_profile(payload)
    return object_response(
        request=request, config=config, data=profile, message="Instructor profile created successfully"
    )


@profiles_router.put("/{profile_id}", response_model=InstructorProfileResponse)
def update_instructor_profile(
    profile_id: str,
    body: InstructorProfileUpdate,
    request: Request,
    service: ProfileServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    record_id = parse_uuid(profile_id, label="instructor profile")
    profile = service.update_profile(record_id, body.model_dump(exclude_unset=True))
    return object_response(
        request=request, config=config, data=profile, message="Instructor profile updated successfully"
    )


@profiles_router.delete("/{profile_id}", response_model=MessageResponse)
def delete_instructor_profile(
    profile_id: str, request: Request, service: ProfileServiceDep, config: ConfigDep
) -> dict[str, object]:
    service.delete_profile(parse_uuid(profile_id, label="instructor profile"))
    return object_response(
        request=request, config=config, data=None, message="Instructor profile deleted successfully"
    )
