# This file defines review, Q&A, announcement, notification, and wishlist schemas.
# It exists so community-facing contracts are explicit for both humans and automation.
# Flags derived by the server, like `is_answered`, appear on records only.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.api.schemas.common import EnvelopeFields, PaginationMetadata


class ReviewCreate(BaseModel):
    user_id: str
    course_id: str
    rating: int = Field(ge=1, le=5)
    review_text: str | None = None


class ReviewUpdate(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    review_text: str | None = None
    is_approved: bool | None = None


class ReviewRecord(BaseModel):
    id: str
    user_id: str
    course_id: str
    rating: int
    review_text: str | None = None
    is_approved: bool
    created_at: datetime
    updated_at: datetime


class ReviewResponse(EnvelopeFields):
    data: ReviewRecord


class ReviewListResponse(EnvelopeFields):
    data: list[ReviewRecord]
    pagination: PaginationMetadata


class QuestionCreate(BaseModel):
    course_id: str
    lecture_id: str | None = None
    user_id: str
    title: str = Field(min_length=1, max_length=200)
    question: str = Field(min_length=1)


class QuestionUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    question: str | None = Field(default=None, min_length=1)


class QuestionRecord(BaseModel):
    id: str
    course_id: str
    lecture_id: str | None = None
    user_id: str
    title: str
    question: str
    is_answered: bool
    created_at: datetime
    updated_at: datetime


class QuestionResponse(EnvelopeFields):
    data: QuestionRecord


class QuestionListResponse(EnvelopeFields):
    data: list[QuestionRecord]
    pagination: PaginationMetadata


class AnswerCreate(BaseModel):
    question_id: str
    user_id: str
    answer: str = Field(min_length=1)
    is_instructor_answer: bool | None = None


class AnswerUpdate(BaseModel):
    answer: str | None = Field(default=None, min_length=1)
    is_instructor_answer: bool | None = None
    votes: int | None = None


class AnswerRecord(BaseModel):
    id: str
    question_id: str
    user_id: str
    answer: str
    is_instructor_answer: bool
    votes: int
    created_at: datetime
    updated_at: datetime


class AnswerResponse(EnvelopeFields):
    data: AnswerRecord


class AnswerListResponse(EnvelopeFields):
    data: list[AnswerRecord]
    pagination: PaginationMetadata


class QuestionAnswersResponse(EnvelopeFields):
    data: list[AnswerRecord]


class AnnouncementCreate(BaseModel):
    course_id: str
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    is_published: bool | None = None


class AnnouncementUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    is_published: bool | None = None


class AnnouncementRecord(BaseModel):
    id: str
    course_id: str
    title: str
    content: str
    is_published: bool
    created_at: datetime
    updated_at: datetime


class AnnouncementResponse(EnvelopeFields):
    data: AnnouncementRecord


class AnnouncementListResponse(EnvelopeFields):
    data: list[AnnouncementRecord]
    pagination: PaginationMetadata


class NotificationCreate(BaseModel):
    user_id: str
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1)
    type: str = Field(min_length=1, max_length=50)
    related_id: str | None = None


class NotificationUpdate(BaseModel):
    is_read: bool | None = None


class MarkAllReadRequest(BaseModel):
    user_id: str


class NotificationRecord(BaseModel):
    id: str
    user_id: str
    title: str
    message: str
    type: str
    related_id: str | None = None
    is_read: bool
    created_at: datetime
    updated_at: datetime


class NotificationResponse(EnvelopeFields):
    data: NotificationRecord


class NotificationListResponse(EnvelopeFields):
    data: list[NotificationRecord]
    pagination: PaginationMetadata


class MarkAllReadResult(BaseModel):
    user_id: str
    updated_count: int


class MarkAllReadResponse(EnvelopeFields):
    data: MarkAllReadResult


class WishlistCreate(BaseModel):
    user_id: str
    course_id: str


class WishlistRecord(BaseModel):
    id: str
    user_id: str
    course_id: str
    created_at: datetime


class WishlistResponse(EnvelopeFields):
    data: WishlistRecord


class WishlistListResponse(EnvelopeFields):
    data: list[WishlistRecord]
    pagination: PaginationMetadata


class WishlistCheck(BaseModel):
    user_id: str
    course_id: str
    in_wishlist: bool


class WishlistCheckResponse(EnvelopeFields):
    data: WishlistCheck
