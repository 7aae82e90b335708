# This file defines coupon and coupon validation schemas.
# It exists so discount contracts are explicit for checkout integrations.

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from src.api.schemas.common import EnvelopeFields, PaginationMetadata

DiscountType = Literal["percentage", "fixed"]


class CouponCreate(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    description: str | None = None
    discount_type: DiscountType
    discount_value: float = Field(gt=0)
    min_order_amount: float | None = Field(default=None, ge=0)
    max_uses: int | None = Field(default=None, gt=0)
    valid_from: datetime | None = None
    valid_until: datetime | None = None


class CouponUpdate(BaseModel):
    code: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = None
    discount_type: DiscountType | None = None
    discount_value: float | None = Field(default=None, gt=0)
    min_order_amount: float | None = Field(default=None, ge=0)
    max_uses: int | None = Field(default=None, gt=0)
    is_active: bool | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None


class CouponRecord(BaseModel):
    id: str
    code: str
    description: str | None = None
    discount_type: str
    discount_value: float
    min_order_amount: float | None = None
    max_uses: int | None = None
    used_count: int
    is_active: bool
    valid_from: datetime
    valid_until: datetime | None = None
    created_at: datetime
    updated_at: datetime


class CouponResponse(EnvelopeFields):
    data: CouponRecord


class CouponListResponse(EnvelopeFields):
    data: list[CouponRecord]
    pagination: PaginationMetadata


class CouponValidateRequest(BaseModel):
    code: str = Field(min_length=1)
    order_amount: float = Field(gt=0)


class CouponValidation(BaseModel):
    is_valid: bool
    message: str
    discount_amount: float | None = None
    coupon: CouponRecord | None = None


class CouponValidationResponse(EnvelopeFields):
    data: CouponValidation
