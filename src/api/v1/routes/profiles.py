"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import (
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdate,
    PublicProfileDetailResponse,
    PublicProfileResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import Profile
from domain.services.profile_service import ProfileService

_error_responses: dict[int | str, dict] = {
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
}

router = APIRouter(prefix="/profile", tags=["profiles"], responses=_error_responses)
profiles_router = APIRouter(prefix="/profiles", tags=["profiles"], responses=_error_responses)


@router.get(
    "",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={
        200: {"description": "The caller's profile"},
        401: {"description": "Not authenticated"},
        404: {"description": "Profile could not be provisioned"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile (created on first request)."""
    profile = await service.get_profile(user.id)
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.put(
    "",
    response_model=ProfileDetailResponse,
    summary="Update my profile",
    responses={
        200: {"description": "Profile updated"},
        400: {"description": "Validation error"},
        401: {"description": "Not authenticated"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """
    Update display name, bio or picture. Only fields present in the body change.

    Send `null` for `bio` or `profile_picture` to clear them.
    """
    fields = body.model_fields_set
    profile = await service.update_profile(
        user.id,
        name=body.name,
        bio=body.bio if "bio" in fields else ...,
        profile_picture=body.profile_picture if "profile_picture" in fields else ...,
    )
    return ProfileDetailResponse(data=_build_profile_response(profile))


@profiles_router.get(
    "/{profile_id}",
    response_model=PublicProfileDetailResponse,
    summary="Get a public profile",
    responses={
        200: {"description": "Public author profile"},
        400: {"description": "Malformed profile ID"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_public_profile(
    request: Request,
    profile_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> PublicProfileDetailResponse:
    """Get the public fields of any author's profile."""
    profile = await service.get_profile(profile_id)
    return PublicProfileDetailResponse(
        data=PublicProfileResponse(
            id=profile.id,
            name=profile.name,
            bio=profile.bio,
            profile_picture=profile.profile_picture,
        )
    )


def _build_profile_response(profile: Profile) -> ProfileResponse:
    """Convert domain entity to response schema."""
    return ProfileResponse(
        id=profile.id,
        email=profile.email,
        name=profile.name,
        bio=profile.bio,
        profile_picture=profile.profile_picture,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )
