# This file defines course, section, and lecture schemas.
# It exists so curriculum contracts are explicit for both humans and automation.
# Derived counters (rating, totals) appear on records but never on request models.

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from src.api.schemas.common import EnvelopeFields, PaginationMetadata

CourseLevel = Literal["beginner", "intermediate", "advanced"]
CourseStatus = Literal["draft", "pending", "published", "archived"]
ContentType = Literal["video", "article", "quiz", "file"]


class CourseCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255)
    description: str | None = None
    short_description: str | None = None
    thumbnail_url: str | None = None
    preview_video_url: str | None = None
    instructor_id: str
    category_id: str
    price: float = Field(default=0, ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    language: str = Field(default="English", max_length=50)
    level: CourseLevel
    requirements: list[str] | None = None
    what_you_learn: list[str] | None = None
    target_audience: list[str] | None = None


class CourseUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    short_description: str | None = None
    thumbnail_url: str | None = None
    preview_video_url: str | None = None
    category_id: str | None = None
    price: float | None = Field(default=None, ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    language: str | None = Field(default=None, max_length=50)
    level: CourseLevel | None = None
    status: CourseStatus | None = None
    requirements: list[str] | None = None
    what_you_learn: list[str] | None = None
    target_audience: list[str] | None = None


class CourseRecord(BaseModel):
    id: str
    title: str
    slug: str
    description: str | None = None
    short_description: str | None = None
    thumbnail_url: str | None = None
    preview_video_url: str | None = None
    instructor_id: str
    category_id: str
    price: float
    discount_price: float | None = None
    language: str
    level: str
    duration_hours: int
    total_lectures: int
    status: str
    requirements: list[str] = Field(default_factory=list)
    what_you_learn: list[str] = Field(default_factory=list)
    target_audience: list[str] = Field(default_factory=list)
    rating: float
    total_students: int
    total_reviews: int
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class CourseResponse(EnvelopeFields):
    data: CourseRecord


class CourseListResponse(EnvelopeFields):
    data: list[CourseRecord]
    pagination: PaginationMetadata


class ReviewStats(BaseModel):
    course_id: str
    total_reviews: int
    average_rating: float
    rating_distribution: dict[str, int]


class ReviewStatsResponse(EnvelopeFields):
    data: ReviewStats


class SectionCreate(BaseModel):
    course_id: str
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    sort_order: int | None = None


class SectionUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    sort_order: int | None = None


class LectureCreate(BaseModel):
    section_id: str
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    content_type: ContentType
    video_url: str | None = None
    video_duration: int | None = Field(default=None, ge=0)
    article_content: str | None = None
    file_url: str | None = None
    sort_order: int | None = None
    is_preview: bool | None = None
    is_downloadable: bool | None = None


class LectureUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    content_type: ContentType | None = None
    video_url: str | None = None
    video_duration: int | None = Field(default=None, ge=0)
    article_content: str | None = None
    file_url: str | None = None
    sort_order: int | None = None
    is_preview: bool | None = None
    is_downloadable: bool | None = None


class LectureRecord(BaseModel):
    id: str
    section_id: str
    title: str
    description: str | None = None
    content_type: str
    video_url: str | None = None
    video_duration: int | None = None
    article_content: str | None = None
    file_url: str | None = None
    sort_order: int
    is_preview: bool
    is_downloadable: bool
    created_at: datetime
    updated_at: datetime


class SectionRecord(BaseModel):
    id: str
    course_id: str
    title: str
    description: str | None = None
    sort_order: int
    created_at: datetime
    updated_at: datetime
    lectures: list[LectureRecord] | None = None


class SectionResponse(EnvelopeFields):
    data: SectionRecord


class SectionListResponse(EnvelopeFields):
    data: list[SectionRecord]
    pagination: PaginationMetadata


class LectureResponse(EnvelopeFields):
    data: LectureRecord


class LectureListResponse(EnvelopeFields):
    data: list[LectureRecord]
    pagination: PaginationMetadata
