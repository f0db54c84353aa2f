"""Pydantic schemas for Post API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.comment import CommentResponse
from api.v1.schemas.profile import AuthorSummary
from core.config import settings


def _check_tag_lengths(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    for tag in tags:
        if len(tag.strip()) > settings.tag_max_length:
            raise ValueError(f"Tags must be at most {settings.tag_max_length} characters")
    return tags


class PostCreate(BaseModel):
    """Schema for creating a Post.

    Any author field in the body is ignored; the author is the caller.
    """

    title: str = Field(..., min_length=1, max_length=settings.post_title_max_length)
    content: str = Field(..., min_length=1, max_length=settings.post_content_max_length)
    tags: list[str] | None = None
    image: str | None = Field(None, max_length=500)

    @field_validator("tags")
    @classmethod
    def check_tag_lengths(cls, tags: list[str] | None) -> list[str] | None:
        return _check_tag_lengths(tags)


class PostUpdate(BaseModel):
    """Schema for updating a Post (all fields optional)."""

    title: str | None = Field(None, min_length=1, max_length=settings.post_title_max_length)
    content: str | None = Field(
        None, min_length=1, max_length=settings.post_content_max_length
    )
    tags: list[str] | None = None
    image: str | None = Field(None, max_length=500)

    @field_validator("tags")
    @classmethod
    def check_tag_lengths(cls, tags: list[str] | None) -> list[str] | None:
        return _check_tag_lengths(tags)


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Hello",
                "content": "World of sufficient length",
                "author_id": "9b2f4a1c-2d6e-4f0a-8c1b-0e5d7a3f6b21",
                "author": {
                    "id": "9b2f4a1c-2d6e-4f0a-8c1b-0e5d7a3f6b21",
                    "name": "Jane",
                    "profile_picture": None,
                },
                "tags": ["intro"],
                "image": None,
                "likes": 0,
                "views": 0,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    title: str
    content: str
    author_id: UUID
    author: AuthorSummary | None = None
    tags: list[str] = []
    image: str | None = None
    likes: int
    views: int
    created_at: datetime
    updated_at: datetime


class PostWithCommentsResponse(PostResponse):
    """Post response with its comments, oldest first."""

    comments: list[CommentResponse] = []


class PostCountersResponse(BaseModel):
    """Engagement counters of a post."""

    id: UUID
    likes: int
    views: int


class PostListResponse(BaseModel):
    """Schema for list of Posts response."""

    data: list[PostResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class PostDetailResponse(BaseModel):
    """Schema for single Post response."""

    data: PostResponse


class PostWithCommentsDetailResponse(BaseModel):
    """Schema for single Post response including comments."""

    data: PostWithCommentsResponse


class PostCountersDetailResponse(BaseModel):
    """Schema for counters response."""

    data: PostCountersResponse
