# This file defines coupon endpoints under the versioned API path.
# It exists so admins can manage discount codes and checkout can price one against an order.
# Validation never fails the request for an unusable coupon; it reports why in the payload.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import ListParams, get_config, get_coupon_service, get_list_params
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.coupon_schemas import (
    CouponCreate,
    CouponListResponse,
    CouponResponse,
    CouponUpdate,
    CouponValidateRequest,
    CouponValidationResponse,
)
from src.api.services.coupon_service import COUPON_DEFINITION, CouponService
from src.api.validation import parse_uuid

router = APIRouter(prefix="/coupons", tags=["coupons"])
CouponServiceDep = Annotated[CouponService, Depends(get_coupon_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get("", response_model=CouponListResponse)
def list_coupons(
    request: Request,
    service: CouponServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    is_active: bool | None = Query(default=None),
    code: str | None = Query(default=None),
) -> dict[str, object]:
    list_query = params.resolve(COUPON_DEFINITION, config)
    result = service.list_coupons(list_query=list_query, is_active=is_active, code=code)
    return list_response(request=request, config=config, result=result, list_query=list_query)


@router.post("/validate", response_model=CouponValidationResponse)
def validate_coupon(
    body: CouponValidateRequest, request: Request, service: CouponServiceDep, config: ConfigDep
) -> dict[str, object]:
    validation = service.validate_coupon(body.code, body.order_amount)
    return object_response(request=request, config=config, data=validation, message=validation["message"])


@router.get("/{coupon_id}", response_model=CouponResponse)
def get_coupon(coupon_id: str, request: Request, service: CouponServiceDep, config: ConfigDep) -> dict[str, object]:
    coupon = service.get(parse_uuid(coupon_id, label="coupon"))
    return object_response(request=request, config=config, data=coupon)


@router.post("", response_model=CouponResponse, status_code=201)
def create_coupon(
    body: CouponCreate, request: Request, service: CouponServiceDep, config: ConfigDep
) -> dict[str, object]:
    coupon = service.create_coupon(body.model_dump())
    return object_response(request=request, config=config, data=coupon, message="Coupon created successfully")


@router.put("/{coupon_id}", response_model=CouponResponse)
def update_coupon(
    coupon_id: str, body: CouponUpdate, request: Request, service: CouponServiceDep, config: ConfigDep
) -> dict[str, object]:
    record_id = parse_uuid(coupon_id, label="coupon")
    coupon = service.update_coupon(record_id, body.model_dump(exclude_unset=True))
    return object_response(request=request, config=config, data=coupon, message="Coupon updated successfully")


@router.delete("/{coupon_id}", response_model=MessageResponse)
def delete_coupon(coupon_id: str, request: Request, service: CouponServiceDep, config: ConfigDep) -> dict[str, object]:
    service.delete_coupon(parse_uuid(coupon_id, label="coupon"))
    return object_response(request=request, config=config, data=None, message="Coupon deleted successfully")
