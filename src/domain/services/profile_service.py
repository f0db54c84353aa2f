"""Profile service layer."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError, ValidationError
from domain.entities.profile import Profile, default_profile_name
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Service layer for user profiles linked to identity-provider users."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def ensure_profile(
        self,
        user_id: UUID,
        email: str | None = None,
        display_name: str | None = None,
    ) -> Profile:
        """Return the caller's profile, creating it on first sight."""
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get(user_id)
            if existing:
                return existing

            profile = Profile(
                id=user_id,
                email=email,
                name=default_profile_name(email, display_name),
            )
            created = await uow.profiles.create(profile)
            await uow.commit()

            logger.info("profile_provisioned", profile_id=str(user_id))
            return created

    async def get_profile(self, profile_id: UUID) -> Profile:
        """Get a profile by ID."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            return profile

    async def update_profile(
        self,
        profile_id: UUID,
        name: str | None = None,
        bio: object = ...,  # Sentinel to detect explicit None
        profile_picture: object = ...,
    ) -> Profile:
        """Overwrite only the supplied profile fields."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            if name is not None:
                if not name.strip():
                    raise ValidationError("Name cannot be empty", field="name")
                profile.name = name.strip()
            if bio is not ...:
                profile.bio = bio  # type: ignore[assignment]
            if profile_picture is not ...:
                profile.profile_picture = profile_picture  # type: ignore[assignment]

            profile.updated_at = datetime.utcnow()

            updated = await uow.profiles.update(profile)
            await uow.commit()

            return updated
