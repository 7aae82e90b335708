# This file defines category, tag, and course-tag schemas.
# It exists so catalog contracts are explicit for both humans and automation.
# Update models leave every field optional; only fields present in the body are written.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.api.schemas.common import EnvelopeFields, PaginationMetadata

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=120)
    description: str | None = None
    icon_url: str | None = None
    parent_id: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class CategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    slug: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None
    icon_url: str | None = None
    parent_id: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class CategoryRecord(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    icon_url: str | None = None
    parent_id: str | None = None
    sort_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CategoryDetail(CategoryRecord):
    children: list[CategoryRecord] = Field(default_factory=list)


class CategoryResponse(EnvelopeFields):
    data: CategoryRecord


class CategoryDetailResponse(EnvelopeFields):
    data: CategoryDetail


class CategoryListResponse(EnvelopeFields):
    data: list[CategoryRecord]
    pagination: PaginationMetadata


class TagCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    slug: str = Field(min_length=1, max_length=50)
    description: str | None = None
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)


class TagUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    slug: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = None
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)


class TagRecord(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    color: str | None = None
    created_at: datetime
    updated_at: datetime


class TagResponse(EnvelopeFields):
    data: TagRecord


class TagListResponse(EnvelopeFields):
    data: list[TagRecord]
    pagination: PaginationMetadata


class CourseTagsResponse(EnvelopeFields):
    data: list[TagRecord]


class CourseTagLink(BaseModel):
    course_id: str
    tag_id: str


class CourseTagRecord(CourseTagLink):
    tag: TagRecord


class CourseTagResponse(EnvelopeFields):
    data: CourseTagRecord
