"""
Unit tests for list pagination and sort parsing.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest

from src.api.error_handlers import BadRequestError
from src.api.pagination import (
    build_pagination_metadata,
    compute_total_pages,
    normalize_pagination,
    parse_sort,
    resolve_list_query,
)


def test_normalize_pagination_and_sort_helpers() -> None:
    pagination = normalize_pagination(page=3, limit=None, default_page_size=10, max_page_size=100)
    sort = parse_sort(
        requested_sort="Price:DESC",
        default_sort="created_at:desc",
        allowed_fields={"price", "created_at"},
    )

    assert pagination.limit == 10
    assert pagination.offset == 20
    assert sort.as_text == "price:desc"
    assert sort.order_by({"price": "c.price"}) == "c.price DESC"


def test_sort_without_direction_defaults_to_ascending() -> None:
    sort = parse_sort(requested_sort="title", default_sort="created_at:desc", allowed_fields={"title"})
    assert sort.order == "asc"


@pytest.mark.parametrize(
    ("total_count", "limit", "expected"),
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (7, 2, 4)],
)
def test_total_pages_is_ceiling(total_count: int, limit: int, expected: int) -> None:
    assert compute_total_pages(total_count=total_count, limit=limit) == expected


def test_pagination_metadata_shape() -> None:
    query = resolve_list_query(
        page=2,
        limit=3,
        sort=None,
        sort_fields={"created_at"},
        default_sort="created_at:desc",
        default_page_size=10,
        max_page_size=100,
    )
    metadata = build_pagination_metadata(pagination=query.pagination, sort=query.sort, total_count=5)

    assert metadata == {"page": 2, "limit": 3, "total_count": 5, "total_pages": 2, "sort": "created_at:desc"}


@pytest.mark.parametrize(
    ("page", "limit", "sort", "message"),
    [
        (0, None, None, "page must be >= 1"),
        (1, 0, None, "limit must be >= 1"),
        (1, 101, None, "limit must be <= 100"),
        (1, None, "password_hash:asc", "Unsupported sort field"),
        (1, None, "created_at:sideways", "sort order must be"),
    ],
)
def test_invalid_list_query_raises_bad_request(
    page: int, limit: int | None, sort: str | None, message: str
) -> None:
    with pytest.raises(BadRequestError, match=message):
        resolve_list_query(
            page=page,
            limit=limit,
            sort=sort,
            sort_fields={"created_at"},
            default_sort="created_at:desc",
            default_page_size=10,
            max_page_size=100,
        )
