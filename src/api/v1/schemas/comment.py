"""Pydantic schemas for Comment API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.profile import AuthorSummary
from core.config import settings


class CommentCreate(BaseModel):
    """Schema for creating a Comment."""

    content: str = Field(..., max_length=settings.comment_max_length)

    @field_validator("content")
    @classmethod
    def strip_content(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Comment content cannot be empty")
        return value


class CommentResponse(BaseModel):
    """Schema for Comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    post_id: UUID
    author_id: UUID
    author: AuthorSummary | None = None
    content: str
    created_at: datetime


class CommentDetailResponse(BaseModel):
    """Schema for single Comment response."""

    data: CommentResponse
