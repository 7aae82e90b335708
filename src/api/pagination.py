# This file handles pagination and sort parsing for list endpoints.
# It exists so every router uses the same deterministic rules for page size and ordering.
# The helpers validate user input and produce stable offset/limit behavior.
# Centralizing this logic keeps endpoint code small and avoids inconsistent query semantics.

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from src.api.error_handlers import BadRequestError


@dataclass(frozen=True)
class SortSpec:
    field: str
    order: str

    @property
    def as_text(self) -> str:
        return f"{self.field}:{self.order}"

    def order_by(self, field_map: dict[str, str]) -> str:
        """Render an ORDER BY fragment using the allowlisted column expression."""

        return f"{field_map[self.field]} {self.order.upper()}"


@dataclass(frozen=True)
class PaginationSpec:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class ListQuery:
    pagination: PaginationSpec
    sort: SortSpec


def normalize_pagination(
    *,
    page: int | None,
    limit: int | None,
    default_page_size: int,
    max_page_size: int,
) -> PaginationSpec:
    """Validate and normalize page/limit values."""

    resolved_page = 1 if page is None else page
    resolved_limit = default_page_size if limit is None else limit
    if resolved_page < 1:
        raise ValueError("page must be >= 1")
    if resolved_limit < 1:
        raise ValueError("limit must be >= 1")
    if resolved_limit > max_page_size:
        raise ValueError(f"limit must be <= {max_page_size}")
    return PaginationSpec(page=resolved_page, limit=resolved_limit)


def parse_sort(
    *,
    requested_sort: str | None,
    default_sort: str,
    allowed_fields: Iterable[str],
) -> SortSpec:
    """Parse sort input in the form `field:asc|desc`."""

    allowed = set(allowed_fields)
    raw_sort = (requested_sort or default_sort).strip().lower()
    if not raw_sort:
        raise ValueError("sort cannot be empty")

    if ":" in raw_sort:
        field, order = raw_sort.split(":", 1)
    else:
        field, order = raw_sort, "asc"

    if field not in allowed:
        supported = ", ".join(sorted(allowed))
        raise ValueError(f"Unsupported sort field '{field}'. Supported fields: {supported}")
    if order not in {"asc", "desc"}:
        raise ValueError("sort order must be 'asc' or 'desc'")
    return SortSpec(field=field, order=order)


def compute_total_pages(*, total_count: int, limit: int) -> int:
    """Compute deterministic total page count (ceil of total / limit)."""

    if total_count <= 0:
        return 0
    return ((total_count - 1) // limit) + 1


def build_pagination_metadata(
    *, pagination: PaginationSpec, sort: SortSpec, total_count: int
) -> dict[str, object]:
    return {
        "page": pagination.page,
        "limit": pagination.limit,
        "total_count": total_count,
        "total_pages": compute_total_pages(total_count=total_count, limit=pagination.limit),
        "sort": sort.as_text,
    }


def resolve_list_query(
    *,
    page: int | None,
    limit: int | None,
    sort: str | None,
    sort_fields: Iterable[str],
    default_sort: str,
    default_page_size: int,
    max_page_size: int,
) -> ListQuery:
    """Validate list query parameters, raising BadRequest before any store call."""

    try:
        pagination = normalize_pagination(
            page=page,
            limit=limit,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
        )
        sort_spec = parse_sort(
            requested_sort=sort,
            default_sort=default_sort,
            allowed_fields=sort_fields,
        )
    except ValueError as exc:
        raise BadRequestError(str(exc)) from exc
    return ListQuery(pagination=pagination, sort=sort_spec)
