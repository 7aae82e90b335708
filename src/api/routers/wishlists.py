# This file defines wishlist endpoints under the versioned API path.
# It exists so users can bookmark courses they have not enrolled in yet.
# The fixed `check` and `remove` routes are declared before `/{wishlist_id}`.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import ListParams, get_config, get_list_params, get_wishlist_service
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.engagement_schemas import (
    WishlistCheckResponse,
    WishlistCreate,
    WishlistListResponse,
    WishlistResponse,
)
from src.api.services.wishlist_service import WISHLIST_DEFINITION, WishlistService
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

router = APIRouter(prefix="/wishlists", tags=["wishlists"])
WishlistServiceDep = Annotated[WishlistService, Depends(get_wishlist_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get("", response_model=WishlistListResponse)
def list_wishlists(
    request: Request,
    service: WishlistServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    user_id: str | None = Query(default=None),
    course_id: str | None = Query(default=None),
) -> dict[str, object]:
    user = parse_optional_uuid(user_id, label="user")
    course = parse_optional_uuid(course_id, label="course")
    list_query = params.resolve(WISHLIST_DEFINITION, config)
    result = service.list_wishlists(list_query=list_query, user_id=user, course_id=course)
    return list_response(request=request, config=config, result=result, list_query=list_query)


@router.get("/check", response_model=WishlistCheckResponse)
def check_wishlist(
    request: Request,
    service: WishlistServiceDep,
    config: ConfigDep,
    user_id: str = Query(),
    course_id: str = Query(),
) -> dict[str, object]:
    result = service.check(parse_uuid(user_id, label="user"), parse_uuid(course_id, label="course"))
    return object_response(request=request, config=config, data=result)


@router.delete("/remove", response_model=MessageResponse)
def remove_from_wishlist(
    request: Request,
    service: WishlistServiceDep,
    config: ConfigDep,
    user_id: str = Query(),
    course_id: str = Query(),
) -> dict[str, object]:
    service.remove(parse_uuid(user_id, label="user"), parse_uuid(course_id, label="course"))
    return object_response(
        request=request, config=config, data=None, message="Course removed from wishlist successfully"
    )


@router.get("/{wishlist_id}", response_model=WishlistResponse)
def get_wishlist(
    wishlist_id: str, request: Request, service: WishlistServiceDep, config: ConfigDep
) -> dict[str, object]:
    item = service.get(parse_uuid(wishlist_id, label="wishlist"))
    return object_response(request=request, config=config, data=item)


@router.post("", response_model=WishlistResponse, status_code=201)
def add_to_wishlist(
    body: WishlistCreate, request: Request, service: WishlistServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), user_id="user", course_id="course")
    item = service.create_wishlist(payload)
    return object_response(
        request=request, config=config, data=item, message="Course added to wishlist successfully"
    )


@router.delete("/{wishlist_id}", response_model=MessageResponse)
def delete_wishlist(
    wishlist_id: str, request: Request, service: WishlistServiceDep, config: ConfigDep
) -> dict[str, object]:
    service.delete_wishlist(parse_uuid(wishlist_id, label="wishlist"))
    return object_response(
        request=request, config=config, data=None, message="Wishlist item deleted successfully"
    )
