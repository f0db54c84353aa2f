"""Comment domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.profile import AuthorSummary


@dataclass
class Comment:
    """Append-only annotation on a post."""

    post_id: UUID
    author_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    author: AuthorSummary | None = None
