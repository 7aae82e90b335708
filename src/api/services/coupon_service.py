# This file implements discount coupons and coupon validation against an order amount.
# It exists so checkout flows can price a coupon without writing to the store.
# Validation checks run in a fixed order and the first failing check names the reason.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from src.api.pagination import ListQuery
from src.api.services.resource_service import ResourceDefinition, ResourceService

COUPON_SORT_FIELD_MAP: dict[str, str] = {
    "code": "code",
    "discount_value": "discount_value",
    "valid_from": "valid_from",
    "valid_until": "valid_until",
    "created_at": "created_at",
}

COUPON_DEFINITION = ResourceDefinition(
    table="coupons",
    label="Coupon",
    columns=(
        "id",
        "code",
        "description",
        "discount_type",
        "discount_value",
        "min_order_amount",
        "max_uses",
        "used_count",
        "is_active",
        "valid_from",
        "valid_until",
        "created_at",
        "updated_at",
    ),
    updatable_fields=(
        "code",
        "description",
        "discount_type",
        "discount_value",
        "min_order_amount",
        "max_uses",
        "is_active",
        "valid_from",
        "valid_until",
    ),
    sort_fields=COUPON_SORT_FIELD_MAP,
    bool_fields=frozenset({"is_active"}),
    float_fields=frozenset({"discount_value", "min_order_amount"}),
    conflict_messages={"code": "Coupon code already exists"},
)


def as_utc(value: datetime | str | None) -> datetime | None:
    """Read a stored timestamp as an aware UTC datetime; SQLite hands back text."""

    if value is None:
        return None
    parsed = datetime.fromisoformat(value) if isinstance(value, str) else value
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def compute_discount(*, discount_type: str, discount_value: float, order_amount: float) -> float:
    if discount_type == "percentage":
        return order_amount * (discount_value / 100)
    return min(discount_value, order_amount)


def check_coupon(
    coupon: dict[str, Any], *, order_amount: float, now: datetime
) -> tuple[bool, str, float | None]:
    """Return `(is_valid, message, discount_amount)` for one coupon at `now`."""

    if not coupon["is_active"]:
        return False, "Coupon is inactive", None

    valid_from = as_utc(coupon["valid_from"])
    if valid_from is not None and now < valid_from:
        return False, "Coupon is not yet valid", None
    valid_until = as_utc(coupon["valid_until"])
    if valid_until is not None and now > valid_until:
        return False, "Coupon has expired", None

    max_uses = coupon["max_uses"]
    if max_uses is not None and int(coupon["used_count"]) >= int(max_uses):
        return False, "Coupon usage limit exceeded", None

    min_order_amount = coupon["min_order_amount"]
    if min_order_amount is not None and order_amount < min_order_amount:
        return False, f"Minimum order amount is {min_order_amount:.2f}", None

    discount = compute_discount(
        discount_type=coupon["discount_type"],
        discount_value=coupon["discount_value"],
        order_amount=order_amount,
    )
    return True, "Coupon is valid", discount


class CouponService(ResourceService):
    """Data access for coupon endpoints."""

    definition = COUPON_DEFINITION

    def list_coupons(
        self, *, list_query: ListQuery, is_active: bool | None, code: str | None
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if is_active is not None:
            filters.append("is_active = :is_active")
            params["is_active"] = is_active
        if code:
            filters.append("LOWER(code) LIKE :code")
            params["code"] = f"%{code.lower()}%"
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_coupon(self, payload: dict[str, Any]) -> dict[str, Any]:
        values = dict(payload)
        values["is_active"] = True
        if values.get("valid_from") is None:
            values["valid_from"] = datetime.now(tz=UTC)
        return self.insert(values)

    def update_coupon(self, coupon_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(coupon_id, changes)

    def delete_coupon(self, coupon_id: str) -> None:
        self.delete(coupon_id)

    def validate_coupon(self, code: str, order_amount: float) -> dict[str, Any]:
        row = self.db.fetch_one(
            f"SELECT {self.definition.select_list} FROM coupons WHERE code = :code",
            {"code": code},
        )
        if row is None:
            return {
                "is_valid": False,
                "message": "Coupon not found",
                "discount_amount": None,
                "coupon": None,
            }

        coupon = self.decode(row)
        is_valid, message, discount = check_coupon(
            coupon, order_amount=order_amount, now=datetime.now(tz=UTC)
        )
        return {
            "is_valid": is_valid,
            "message": message,
            "discount_amount": discount,
            "coupon": coupon,
        }
