# This file defines course review endpoints under the versioned API path.
# It exists so enrolled students can rate courses and clients can read those ratings.
# Writes that change the approved rating set return a warning if the course rating could not be refreshed.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import ListParams, get_config, get_list_params, get_review_service
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.engagement_schemas import (
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
)
from src.api.services.review_service import REVIEW_DEFINITION, CourseReviewService
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

router = APIRouter(prefix="/course-reviews", tags=["reviews"])
ReviewServiceDep = Annotated[CourseReviewService, Depends(get_review_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get("", response_model=ReviewListResponse)
def list_reviews(
    request: Request,
    service: ReviewServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    course_id: str | None = Query(default=None),
    user_id: str | None = Query(default=None),
    rating: int | None = Query(default=None, ge=1, le=5),
    is_approved: bool | None = Query(default=None),
) -> dict[str, object]:
    course = parse_optional_uuid(course_id, label="course")
    user = parse_optional_uuid(user_id, label="user")
    list_query = params.resolve(REVIEW_DEFINITION, config)
    result = service.list_reviews(
        list_query=list_query,
        course_id=course,
        user_id=user,
        rating=rating,
        is_approved=is_approved,
    )
    return list_response(request=request, config=config, result=result, list_query=list_query)


@router.get("/{review_id}", response_model=ReviewResponse)
def get_review(review_id: str, request: Request, service: ReviewServiceDep, config: ConfigDep) -> dict[str, object]:
    review = service.get(parse_uuid(review_id, label="review"))
    return object_response(request=request, config=config, data=review)


@router.post("", response_model=ReviewResponse, status_code=201)
def create_review(
    body: ReviewCreate, request: Request, service: ReviewServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), user_id="user", course_id="course")
    result = service.create_review(payload)
    return object_response(
        request=request,
        config=config,
        data=result["data"],
        message="Review created successfully",
        warnings=result["warnings"],
    )


@router.put("/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: str, body: ReviewUpdate, request: Request, service: ReviewServiceDep, config: ConfigDep
) -> dict[str, object]:
    record_id = parse_uuid(review_id, label="review")
    result = service.update_review(record_id, body.model_dump(exclude_unset=True))
    return object_response(
        request=request,
        config=config,
        data=result["data"],
        message="Review updated successfully",
        warnings=result["warnings"],
    )


@router.delete("/{review_id}", response_model=MessageResponse)
def delete_review(review_id: str, request: Request, service: ReviewServiceDep, config: ConfigDep) -> dict[str, object]:
    result = service.delete_review(parse_uuid(review_id, label="review"))
    return object_response(
        request=request,
        config=config,
        data=None,
        message="Review deleted successfully",
        warnings=result["warnings"],
    )
