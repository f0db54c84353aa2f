"""Comment repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.comment import Comment


class ICommentRepository(Protocol):
    """Repository interface for Comment entities (append-only)."""

    async def list_for_post(self, post_id: UUID) -> list[Comment]:
        """Get a post's comments, oldest first."""
        ...

    async def create(self, comment: Comment) -> Comment:
        """Create a new comment."""
        ...
