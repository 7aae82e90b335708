# This file implements user notifications and the best-effort notification fan-out.
# It exists so routers and other services share one way of writing inbox entries.
# Fan-out writes triggered by answers or announcements never fail the primary request;
# their failures are logged and reported back as envelope warnings.

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from src.api.db_access import DatabaseClient
from src.api.pagination import ListQuery
from src.api.services.resource_service import ResourceDefinition, ResourceService
from src.api.validation import new_id

logger = logging.getLogger(__name__)

NOTIFICATION_SORT_FIELD_MAP: dict[str, str] = {
    "created_at": "created_at",
    "type": "type",
    "is_read": "is_read",
}

NOTIFICATION_DEFINITION = ResourceDefinition(
    table="notifications",
    label="Notification",
    columns=(
        "id",
        "user_id",
        "title",
        "message",
        "type",
        "related_id",
        "is_read",
        "created_at",
        "updated_at",
    ),
    updatable_fields=("is_read",),
    sort_fields=NOTIFICATION_SORT_FIELD_MAP,
    bool_fields=frozenset({"is_read"}),
)


def notify_users(
    db: DatabaseClient,
    *,
    user_ids: Iterable[str],
    title: str,
    message: str,
    notification_type: str,
    related_id: str | None,
) -> str | None:
    """Insert one notification per recipient; return a warning if the fan-out failed."""

    created_at = datetime.now(tz=UTC)
    statements = [
        (
            """
            INSERT INTO notifications
                (id, user_id, title, message, type, related_id, is_read, created_at, updated_at)
            VALUES
                (:id, :user_id, :title, :message, :type, :related_id, FALSE, :created_at, :created_at)
            """,
            {
                "id": new_id(),
                "user_id": user_id,
                "title": title,
                "message": message,
                "type": notification_type,
                "related_id": related_id,
                "created_at": created_at,
            },
        )
        for user_id in user_ids
    ]
    if not statements:
        return None
    try:
        for query, params in statements:
            db.execute(query, params)
    except SQLAlchemyError:
        logger.warning(
            "Failed to send %s notifications for %s", notification_type, related_id, exc_info=True
        )
        return f"Failed to send {notification_type} notifications."
    return None


class NotificationService(ResourceService):
    """Data access for notification endpoints."""

    definition = NOTIFICATION_DEFINITION

    def list_notifications(
        self,
        *,
        list_query: ListQuery,
        user_id: str | None,
        notification_type: str | None,
        is_read: bool | None,
    ) -> dict[str, Any]:
        filters: list[str] = []
        params: dict[str, Any] = {}
        if user_id is not None:
            filters.append("user_id = :user_id")
            params["user_id"] = user_id
        if notification_type:
            filters.append("type = :type")
            params["type"] = notification_type
        if is_read is not None:
            filters.append("is_read = :is_read")
            params["is_read"] = is_read
        return self.list_records(list_query=list_query, filters=filters, params=params)

    def create_notification(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.require("users", payload["user_id"], "User not found")
        values = dict(payload)
        values["is_read"] = False
        return self.insert(values)

    def update_notification(self, notification_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self.update(notification_id, changes)

    def mark_all_read(self, user_id: str) -> dict[str, Any]:
        self.require("users", user_id, "User not found")
        updated = self.db.execute(
            """
            UPDATE notifications
            SET is_read = TRUE, updated_at = :updated_at
            WHERE user_id = :user_id AND is_read = FALSE
            """,
            {"user_id": user_id, "updated_at": datetime.now(tz=UTC)},
        )
        return {"user_id": user_id, "updated_count": updated}

    def get_stats(self, user_id: str) -> dict[str, Any]:
        self.require("users", user_id, "User not found")
        row = self.db.fetch_one(
            """
            SELECT
                COUNT(*) AS total_count,
                COALESCE(SUM(CASE WHEN is_read = FALSE THEN 1 ELSE 0 END), 0) AS unread_count,
                COALESCE(SUM(CASE WHEN is_read = TRUE THEN 1 ELSE 0 END), 0) AS read_count
            FROM notifications
            WHERE user_id = :user_id
            """,
            {"user_id": user_id},
        ) or {"total_count": 0, "unread_count": 0, "read_count": 0}
        return {
            "user_id": user_id,
            "total_count": int(row["total_count"]),
            "unread_count": int(row["unread_count"]),
            "read_count": int(row["read_count"]),
        }
