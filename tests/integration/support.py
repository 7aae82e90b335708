# This file provides shared helpers for SQLite-backed integration tests.
# It exists so tests can seed users, courses, and enrollments through the real services.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.api.db_access import DatabaseClient
from src.api.services.category_service import CategoryService
from src.api.services.course_service import CourseService
from src.api.services.enrollment_service import EnrollmentService
from src.api.services.user_service import UserService
from tests.api.support import build_test_config


@dataclass
class Marketplace:
    db: DatabaseClient
    instructor: dict[str, Any]
    category: dict[str, Any]
    course: dict[str, Any]

    def service(self, service_cls: type) -> Any:
        return service_cls(config=build_test_config(), db=self.db)

    def add_student(self, name: str) -> dict[str, Any]:
        return self.service(UserService).create_user(
            {
                "email": f"{name}@example.com",
                "username": name,
                "password": "secret123",
                "first_name": name.capitalize(),
                "last_name": "Learner",
                "role": "student",
            }
        )

    def enroll(self, user_id: str) -> dict[str, Any]:
        return self.service(EnrollmentService).create_enrollment(
            {"user_id": user_id, "course_id": self.course["id"]}
        )["data"]

    def course_record(self) -> dict[str, Any]:
        return self.service(CourseService).get(self.course["id"])


def seed_marketplace(db: DatabaseClient) -> Marketplace:
    """Create one instructor, one category, and one published course."""

    config = build_test_config()
    instructor = UserService(config=config, db=db).create_user(
        {
            "email": "ada@example.com",
            "username": "ada",
            "password": "secret123",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "role": "instructor",
        }
    )
    category = CategoryService(config=config, db=db).create_category(
        {"name": "Data", "slug": "data", "sort_order": 1}
    )
    courses = CourseService(config=config, db=db)
    course = courses.create_course(
        {
            "title": "Intro to SQL",
            "slug": "intro-to-sql",
            "instructor_id": instructor["id"],
            "category_id": category["id"],
            "language": "English",
            "level": "beginner",
            "price": 19.99,
        }
    )
    course = courses.update_course(course["id"], {"status": "published"})
    return Marketplace(db=db, instructor=instructor, category=category, course=course)
