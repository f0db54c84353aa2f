"""Post domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.comment import Comment
from domain.entities.profile import AuthorSummary


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Trim tags, drop blanks and duplicates while keeping first-seen order.

    Duplicates are compared case-insensitively; the first spelling wins.
    """
    if not tags:
        return []
    seen: set[str] = set()
    result: list[str] = []
    for raw in tags:
        tag = raw.strip()
        if not tag or tag.lower() in seen:
            continue
        seen.add(tag.lower())
        result.append(tag)
    return result


@dataclass
class Post:
    """Domain entity for a blog post.

    ``author_id`` is fixed at creation. ``likes`` and ``views`` only ever grow
    and are changed by the store's atomic increments, never by assignment.
    """

    author_id: UUID
    title: str
    content: str
    id: UUID = field(default_factory=uuid4)
    tags: list[str] = field(default_factory=list)
    image: str | None = None
    likes: int = 0
    views: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    author: AuthorSummary | None = None

    def __post_init__(self) -> None:
        """Normalize tags and keep timestamps consistent."""
        self.tags = normalize_tags(self.tags)
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def touch(self) -> None:
        """Refresh the modification timestamp."""
        self.updated_at = datetime.utcnow()


@dataclass(frozen=True, slots=True)
class PostCounters:
    """Read-only value object: engagement counters after an increment."""

    id: UUID
    likes: int
    views: int


@dataclass(frozen=True, slots=True)
class PostDetail:
    """Read-only value object: a Post together with its comments, oldest first."""

    post: Post
    comments: list[Comment]
