# This file defines category endpoints under the versioned API path.
# It exists so clients can browse and curate the course category tree.
# List endpoints use deterministic sort and pagination behavior like every other resource.
# `parent_id=null` narrows a listing to root categories.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import ListParams, get_category_service, get_config, get_list_params
from src.api.response_envelope import list_response, object_response
from src.api.schemas.catalog_schemas import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)
from src.api.schemas.common import MessageResponse
from src.api.services.category_service import CATEGORY_DEFINITION, CategoryService
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

router = APIRouter(prefix="/categories", tags=["categories"])
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get("", response_model=CategoryListResponse)
def list_categories(
    request: Request,
    service: CategoryServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    parent_id: str | None = Query(default=None),
    is_active: bool | None = Query(default=None),
) -> dict[str, object]:
    roots_only = parent_id is not None and parent_id.lower() == "null"
    parent = None if roots_only else parse_optional_uuid(parent_id, label="parent category")
    list_query = params.resolve(CATEGORY_DEFINITION, config)
    result = service.list_categories(
        list_query=list_query, parent_id=parent, roots_only=roots_only, is_active=is_active
    )
    return list_response(request=request, config=config, result=result, list_query=list_query)


@router.get("/{category_id}", response_model=CategoryDetailResponse)
def get_category(
    category_id: str, request: Request, service: CategoryServiceDep, config: ConfigDep
) -> dict[str, object]:
    category = service.get_category(parse_uuid(category_id, label="category"))
    return object_response(request=request, config=config, data=category)


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    body: CategoryCreate, request: Request, service: CategoryServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), parent_id="parent category")
    category = service.create_category(payload)
    return object_response(
        request=request, config=config, data=category, message="Category created successfully"
    )


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    body: CategoryUpdate,
    request: Request,
    service: CategoryServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    record_id = parse_uuid(category_id, label="category")
    changes = parse_body_ids(body.model_dump(exclude_unset=True), parent_id="parent category")
    category = service.update_category(record_id, changes)
    return object_response(
        request=request, config=config, data=category, message="Category updated successfully"
    )


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: str, request: Request, service: CategoryServiceDep, config: ConfigDep
) -> dict[str, object]:
    service.delete_category(parse_uuid(category_id, label="category"))
    return object_response(
        request=request, config=config, data=None, message="Category deleted successfully"
    )
