"""
Unit tests for coupon validation rules.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from datetime import UTC, datetime, timedelta

import pytest

from src.api.services.coupon_service import as_utc, check_coupon, compute_discount

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


def coupon(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "is_active": True,
        "valid_from": NOW - timedelta(days=1),
        "valid_until": NOW + timedelta(days=30),
        "max_uses": 100,
        "used_count": 0,
        "min_order_amount": None,
        "discount_type": "percentage",
        "discount_value": 10.0,
    }
    row.update(overrides)
    return row


def test_percentage_and_fixed_discounts() -> None:
    assert compute_discount(discount_type="percentage", discount_value=25, order_amount=80) == 20
    assert compute_discount(discount_type="fixed", discount_value=15, order_amount=80) == 15
    # fixed discounts never exceed the order itself
    assert compute_discount(discount_type="fixed", discount_value=50, order_amount=30) == 30


def test_valid_coupon_reports_discount() -> None:
    assert check_coupon(coupon(), order_amount=200, now=NOW) == (True, "Coupon is valid", 20.0)


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"is_active": False}, "Coupon is inactive"),
        ({"valid_from": NOW + timedelta(hours=1)}, "Coupon is not yet valid"),
        ({"valid_until": NOW - timedelta(seconds=1)}, "Coupon has expired"),
        ({"max_uses": 5, "used_count": 5}, "Coupon usage limit exceeded"),
        ({"min_order_amount": 50.0}, "Minimum order amount is 50.00"),
    ],
)
def test_first_failing_check_names_reason(overrides: dict[str, object], message: str) -> None:
    is_valid, reason, discount = check_coupon(coupon(**overrides), order_amount=20, now=NOW)

    assert is_valid is False
    assert reason == message
    assert discount is None


def test_inactive_wins_over_expired() -> None:
    _, reason, _ = check_coupon(
        coupon(is_active=False, valid_until=NOW - timedelta(days=1)), order_amount=20, now=NOW
    )
    assert reason == "Coupon is inactive"


def test_open_ended_coupon_has_no_upper_bound() -> None:
    is_valid, _, _ = check_coupon(coupon(valid_until=None, max_uses=None), order_amount=20, now=NOW)
    assert is_valid is True


def test_as_utc_reads_stored_text() -> None:
    assert as_utc("2026-05-01 12:00:00") == NOW
    assert as_utc("2026-05-01T14:00:00+02:00") == NOW
    assert as_utc(None) is None
