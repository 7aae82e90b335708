#!/usr/bin/env python3
"""
Load sample marketplace data: categories, users, an instructor profile, tags, and one course.
All inserts run in one transaction; derived course counters are recomputed afterwards.
Run it after `scripts/init_schema.py` against an empty database.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from sqlalchemy.exc import SQLAlchemyError

from src.api.db_access import DatabaseClient
from src.api.services.aggregates import AggregateRefresher
from src.api.services.user_service import hash_password
from src.api.validation import new_id
from src.common.logging import configure_logging
from src.common.settings import get_settings

logger = logging.getLogger("seed_data")

CATEGORIES = [
    ("Programming", "programming"),
    ("Design", "design"),
    ("Business", "business"),
    ("Marketing", "marketing"),
    ("Photography", "photography"),
]

TAGS = [
    ("JavaScript", "javascript", "#F7DF1E"),
    ("React", "react", "#61DAFB"),
    ("Node.js", "nodejs", "#339933"),
    ("Python", "python", "#3776AB"),
    ("SQL", "sql", "#336791"),
]

USERS = [
    ("admin@example.com", "admin", "Site", "Admin", "admin"),
    ("instructor@example.com", "instructor", "Ivy", "Teacher", "instructor"),
    ("student1@example.com", "student1", "Sam", "Learner", "student"),
    ("student2@example.com", "student2", "Kim", "Learner", "student"),
]

LECTURES = [
    ("Getting started", [("Welcome", "video", True), ("Tooling setup", "article", False)]),
    ("Components", [("JSX basics", "video", False), ("Props and state", "video", False)]),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed sample course marketplace data")
    parser.add_argument("--password", default="password", help="Password for every seeded user")
    return parser.parse_args()


def _insert(table: str, values: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    columns = ", ".join(values)
    placeholders = ", ".join(f":{column}" for column in values)
    return f"INSERT INTO {table} ({columns}) VALUES ({placeholders})", values


def build_seed_statements(*, password: str, now: datetime) -> tuple[list[tuple[str, dict[str, Any]]], str]:
    """Return the insert statements and the id of the sample course."""

    statements: list[tuple[str, dict[str, Any]]] = []
    stamps = {"created_at": now, "updated_at": now}

    category_ids: dict[str, str] = {}
    for index, (name, slug) in enumerate(CATEGORIES):
        category_ids[slug] = new_id()
        statements.append(
            _insert(
                "categories",
                {"id": category_ids[slug], "name": name, "slug": slug, "sort_order": index, **stamps},
            )
        )

    user_ids: dict[str, str] = {}
    password_hash = hash_password(password)
    for email, username, first_name, last_name, role in USERS:
        user_ids[username] = new_id()
        statements.append(
            _insert(
                "users",
                {
                    "id": user_ids[username],
                    "email": email,
                    "username": username,
                    "password_hash": password_hash,
                    "first_name": first_name,
                    "last_name": last_name,
                    "role": role,
                    "is_verified": True,
                    **stamps,
                },
            )
        )

    statements.append(
        _insert(
            "instructor_profiles",
            {
                "id": new_id(),
                "user_id": user_ids["instructor"],
                "title": "Senior Frontend Engineer",
                "expertise": json.dumps(["JavaScript", "React"]),
                "experience_years": 8,
                "is_approved": True,
                **stamps,
            },
        )
    )

    tag_ids: dict[str, str] = {}
    for name, slug, color in TAGS:
        tag_ids[slug] = new_id()
        statements.append(
            _insert("tags", {"id": tag_ids[slug], "name": name, "slug": slug, "color": color, **stamps})
        )

    course_id = new_id()
    statements.append(
        _insert(
            "courses",
            {
                "id": course_id,
                "title": "React from the ground up",
                "slug": "react-from-the-ground-up",
                "short_description": "Build modern interfaces with React.",
                "instructor_id": user_ids["instructor"],
                "category_id": category_ids["programming"],
                "price": 49.99,
                "language": "English",
                "level": "beginner",
                "status": "published",
                "requirements": json.dumps(["Basic JavaScript"]),
                "what_you_learn": json.dumps(["Components", "State management"]),
                "target_audience": json.dumps(["Web developers"]),
                "published_at": now,
                **stamps,
            },
        )
    )
    for slug in ("javascript", "react"):
        statements.append(_insert("course_tags", {"course_id": course_id, "tag_id": tag_ids[slug]}))

    for section_order, (section_title, lectures) in enumerate(LECTURES):
        section_id = new_id()
        statements.append(
            _insert(
                "course_sections",
                {
                    "id": section_id,
                    "course_id": course_id,
                    "title": section_title,
                    "sort_order": section_order,
                    **stamps,
                },
            )
        )
        for lecture_order, (title, content_type, is_preview) in enumerate(lectures):
            statements.append(
                _insert(
                    "course_lectures",
                    {
                        "id": new_id(),
                        "section_id": section_id,
                        "title": title,
                        "content_type": content_type,
                        "sort_order": lecture_order,
                        "is_preview": is_preview,
                        **stamps,
                    },
                )
            )

    for username, rating in (("student1", 5), ("student2", 4)):
        statements.append(
            _insert(
                "enrollments",
                {"id": new_id(), "user_id": user_ids[username], "course_id": course_id, "enrolled_at": now},
            )
        )
        statements.append(
            _insert(
                "course_reviews",
                {
                    "id": new_id(),
                    "user_id": user_ids[username],
                    "course_id": course_id,
                    "rating": rating,
                    "is_approved": True,
                    **stamps,
                },
            )
        )

    statements.append(
        _insert(
            "coupons",
            {
                "id": new_id(),
                "code": "WELCOME10",
                "description": "10% off your first course",
                "discount_type": "percentage",
                "discount_value": 10,
                "valid_from": now,
                **stamps,
            },
        )
    )
    return statements, course_id


def main() -> None:
    args = parse_args()
    configure_logging()
    settings = get_settings()
    db = DatabaseClient(database_url=settings.DATABASE_URL)

    statements, course_id = build_seed_statements(password=args.password, now=datetime.now(tz=UTC))
    try:
        executed = db.run_in_transaction(statements)
    except SQLAlchemyError:
        logger.exception("Seeding failed; no rows were written")
        sys.exit(1)
    logger.info("Inserted %d sample rows", executed)

    refresher = AggregateRefresher(db)
    warnings = [
        refresher.refresh_course_reviews(course_id),
        refresher.refresh_course_students(course_id),
        refresher.refresh_course_lectures(course_id),
    ]
    for warning in filter(None, warnings):
        logger.warning(warning)


if __name__ == "__main__":
    main()
