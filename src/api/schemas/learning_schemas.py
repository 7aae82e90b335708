# This file defines enrollment and lecture progress schemas.
# It exists so learning-activity contracts are explicit for both humans and automation.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.api.schemas.common import EnvelopeFields, PaginationMetadata


class EnrollmentCreate(BaseModel):
    user_id: str
    course_id: str


class EnrollmentUpdate(BaseModel):
    progress_percentage: float | None = Field(default=None, ge=0, le=100)
    completed_at: datetime | None = None
    certificate_url: str | None = None


class EnrollmentRecord(BaseModel):
    id: str
    user_id: str
    course_id: str
    enrolled_at: datetime
    completed_at: datetime | None = None
    progress_percentage: float
    last_accessed_at: datetime | None = None
    certificate_url: str | None = None


class EnrollmentResponse(EnvelopeFields):
    data: EnrollmentRecord


class EnrollmentListResponse(EnvelopeFields):
    data: list[EnrollmentRecord]
    pagination: PaginationMetadata


class LectureProgressCreate(BaseModel):
    user_id: str
    lecture_id: str
    watch_time: int | None = Field(default=None, ge=0)


class LectureProgressUpdate(BaseModel):
    is_completed: bool | None = None
    watch_time: int | None = Field(default=None, ge=0)


class LectureProgressRecord(BaseModel):
    id: str
    user_id: str
    lecture_id: str
    is_completed: bool
    watch_time: int
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class LectureProgressResponse(EnvelopeFields):
    data: LectureProgressRecord


class LectureProgressListResponse(EnvelopeFields):
    data: list[LectureProgressRecord]
    pagination: PaginationMetadata
