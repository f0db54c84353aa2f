"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post, PostCounters


class IPostRepository(Protocol):
    """Repository interface for Post entities.

    Posts returned by read methods carry their author summary when the
    author's profile exists.
    """

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def get_author_id(self, id: UUID) -> UUID | None:
        """Get the current author of a post straight from the store."""
        ...

    async def list_all(self) -> list[Post]:
        """Get all posts, newest first."""
        ...

    async def list_by_author(self, author_id: UUID) -> list[Post]:
        """Get all posts written by an author, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def update(self, post: Post) -> Post:
        """Update the editable fields of an existing post."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and its comments, returning success status."""
        ...

    async def increment_likes(self, id: UUID) -> PostCounters | None:
        """Atomically add one like; None if the post does not exist."""
        ...

    async def increment_views(self, id: UUID) -> PostCounters | None:
        """Atomically add one view; None if the post does not exist."""
        ...
