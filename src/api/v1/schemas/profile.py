"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from core.config import settings


class AuthorSummary(BaseModel):
    """Minimal author representation embedded in posts and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    profile_picture: str | None = None


class ProfileUpdate(BaseModel):
    """Schema for updating the caller's profile (all fields optional)."""

    name: str | None = Field(None, min_length=1, max_length=settings.profile_name_max_length)
    bio: str | None = Field(None, max_length=settings.profile_bio_max_length)
    profile_picture: str | None = Field(None, max_length=500)


class ProfileResponse(BaseModel):
    """Schema for the caller's own profile."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None = None
    name: str
    bio: str | None = None
    profile_picture: str | None = None
    created_at: datetime
    updated_at: datetime


class PublicProfileResponse(BaseModel):
    """Schema for another user's public profile."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    bio: str | None = None
    profile_picture: str | None = None


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile response."""

    data: ProfileResponse


class PublicProfileDetailResponse(BaseModel):
    """Schema for single public Profile response."""

    data: PublicProfileResponse
