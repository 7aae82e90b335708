# This file implements category persistence for the catalog endpoints.
# It exists so routers can manage the category tree without embedding SQL directly.
# Deletes are gated in application code: a category with children or courses stays.
# Single-category reads include the direct children ordered for display.

from __future__ import annotations

from typing import Any

from src.api.error_handlers import BadRequestError
from src.api.pagination import ListQuery
from src.api.services.resource_service import ResourceDefinition, ResourceService

CATEGORY_SORT_FIELD_MAP: dict[str, str] = {
    "name": "name",
    "slug": "slug",
    "sort_order": "sort_order",
    "created_at": "created_at",
}

CATEGORY_DEFINITION = ResourceDefinition(
    table="categories",
    label="Category",
    columns=(
        "id",
        "name",
        "slug",
        "description",
        "icon_url",
        "parent_id",
        "sort_order",
        "is_active",
        "created_at",
        "updated_at",
    ),
    updatable_fields=(
        "name",
        "slug",
        "description",
        "icon_url",
        "parent_id",
        "sort_order",
        "is_active",
    ),
    sort_fields=CATEGORY_SORT_FIELD_MAP,
    default_sort="sort_order:asc",
    bool_fields=frozenset({"is_active"}),
    conflict_messages={"slug": "Category slug already exists"},
)


class CategoryService(ResourceService):
    """Data access for category endpoints."""

    definition = CATEGORY_DEFINITION

    def list_categories(
        self,
        *,
        list_query: ListQuery,
        parent_id: str | None,
        roots_only: bool,
        is_active: bool | None,
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if roots_only:
            filters.append("parent_id IS NULL")
        elif parent_id is not None:
            filters.append("parent_id = :parent_id")
            params["parent_id"] = parent_id
        if is_active is not None:
            filters.append("is_active = :is_active")
            params["is_active"] = is_active
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def get_category(self, category_id: str) -> dict[str, Any]:
        category = self.get(category_id)
        query = f"""
        SELECT {self.definition.select_list}
        FROM categories
        WHERE parent_id = :parent_id
        ORDER BY sort_order ASC, name ASC
        """
        rows = self.db.fetch_all(query, {"parent_id": category_id})
        category["children"] = [self.decode(row) for row in rows]
        return category

    def create_category(self, payload: dict[str, Any]) -> dict[str, Any]:
        parent_id = payload.get("parent_id")
        if parent_id is not None:
            self.require("categories", parent_id, "Parent category not found")
        return self.insert(payload)

    def update_category(self, category_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        parent_id = changes.get("parent_id")
        if parent_id is not None:
            if parent_id == category_id:
                raise BadRequestError("Category cannot be its own parent")
            self.require("categories", parent_id, "Parent category not found")
        return self.update(category_id, changes)

    def delete_category(self, category_id: str) -> None:
        self.get(category_id)
        if self.count("categories", parent_id=category_id) > 0:
            raise BadRequestError("Cannot delete category with child categories")
        if self.count("courses", category_id=category_id) > 0:
            raise BadRequestError("Cannot delete category that has associated courses")
        self.delete(category_id)
