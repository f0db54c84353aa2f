"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class Profile:
    """Domain entity for a user profile (one per identity-provider user)."""

    id: UUID
    name: str
    email: str | None = None
    bio: str | None = None
    profile_picture: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class AuthorSummary:
    """Read-only value object: the author fields shown next to content."""

    id: UUID
    name: str
    profile_picture: str | None = None


def default_profile_name(email: str | None, display_name: str | None = None) -> str:
    """Pick a display name for a freshly provisioned profile."""
    if display_name and display_name.strip():
        return display_name.strip()
    if email and "@" in email:
        return email.split("@", 1)[0]
    return email or "Anonymous"
