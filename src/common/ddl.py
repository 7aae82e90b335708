"""DDL helpers for the course marketplace schema."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine

DEFAULT_DDL_DIR = Path(__file__).resolve().parents[2] / "sql" / "ddl"

# Parents before children so REFERENCES clauses resolve.
DDL_ORDER = [
    "users.sql",
    "instructor_profiles.sql",
    "categories.sql",
    "courses.sql",
    "tags.sql",
    "course_tags.sql",
    "course_sections.sql",
    "course_lectures.sql",
    "enrollments.sql",
    "lecture_progress.sql",
    "course_reviews.sql",
    "wishlists.sql",
    "coupons.sql",
    "course_announcements.sql",
    "course_questions.sql",
    "course_answers.sql",
    "notifications.sql",
    "api_request_log.sql",
]


def split_statements(sql_text: str) -> list[str]:
    """Split a DDL file into single statements.

    SQLite drivers refuse multi-statement strings, so every file is executed
    one statement at a time. DDL files never contain semicolons inside literals.
    """

    statements = []
    for chunk in sql_text.split(";"):
        lines = [line for line in chunk.splitlines() if not line.strip().startswith("--")]
        statement = "\n".join(lines).strip()
        if statement:
            statements.append(statement)
    return statements


def load_schema_statements(ddl_dir: Path | None = None) -> list[str]:
    ddl_path = ddl_dir or DEFAULT_DDL_DIR
    statements: list[str] = []
    for ddl_file in DDL_ORDER:
        sql_text = (ddl_path / ddl_file).read_text(encoding="utf-8")
        statements.extend(split_statements(sql_text))
    return statements


def apply_schema_ddl(engine: Engine, ddl_dir: Path | None = None) -> int:
    """Apply schema DDL files in deterministic order inside one transaction.

    Returns the number of statements executed.
    """

    statements = load_schema_statements(ddl_dir)
    with engine.begin() as connection:
        for statement in statements:
            connection.exec_driver_sql(statement)
    return len(statements)
