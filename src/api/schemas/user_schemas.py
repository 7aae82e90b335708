# This file defines user and instructor profile schemas.
# It exists so account contracts are explicit and the password hash never appears in a response.
# Update models leave every field optional; only fields present in the body are written.

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from src.api.schemas.common import EnvelopeFields, PaginationMetadata

UserRole = Literal["student", "instructor", "admin"]
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    role: UserRole | None = None
    bio: str | None = None
    avatar_url: str | None = None


class UserUpdate(BaseModel):
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    username: str | None = Field(default=None, min_length=3, max_length=100)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    role: UserRole | None = None
    bio: str | None = None
    avatar_url: str | None = None


class UserRecord(BaseModel):
    id: str
    email: str
    username: str
    first_name: str
    last_name: str
    role: str
    bio: str | None = None
    avatar_url: str | None = None
    is_verified: bool
    created_at: datetime
    updated_at: datetime


class UserResponse(EnvelopeFields):
    data: UserRecord


class UserListResponse(EnvelopeFields):
    data: list[UserRecord]
    pagination: PaginationMetadata


class NotificationStats(BaseModel):
    user_id: str
    total_count: int
    unread_count: int
    read_count: int


class NotificationStatsResponse(EnvelopeFields):
    data: NotificationStats


class InstructorProfileCreate(BaseModel):
    user_id: str
    title: str | None = Field(default=None, max_length=200)
    expertise: list[str] | None = None
    experience_years: int | None = Field(default=None, ge=0)
    website_url: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None


class InstructorProfileUpdate(BaseModel):
    title: str | None = Field(default=None, max_length=200)
    expertise: list[str] | None = None
    experience_years: int | None = Field(default=None, ge=0)
    website_url: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    is_approved: bool | None = None


class InstructorProfileRecord(BaseModel):
    id: str
    user_id: str
    title: str | None = None
    expertise: list[str] = Field(default_factory=list)
    experience_years: int
    rating: float
    total_students: int
    total_courses: int
    total_reviews: int
    website_url: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    is_approved: bool
    created_at: datetime
    updated_at: datetime


class InstructorProfileResponse(EnvelopeFields):
    data: InstructorProfileRecord


class InstructorProfileListResponse(EnvelopeFields):
    data: list[InstructorProfileRecord]
    pagination: PaginationMetadata
