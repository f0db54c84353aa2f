"""Comment service layer."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import PostNotFoundError, ValidationError
from domain.entities.comment import Comment
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class CommentService:
    """Service layer for append-only post comments."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def add_comment(self, post_id: UUID, author_id: UUID, content: str) -> Comment:
        """Attach a comment to an existing post."""
        text = (content or "").strip()
        if not text:
            raise ValidationError("Comment content is required", field="content")

        async with self._uow_factory() as uow:
            if await uow.posts.get_author_id(post_id) is None:
                raise PostNotFoundError(str(post_id))

            comment = Comment(post_id=post_id, author_id=author_id, content=text)
            created = await uow.comments.create(comment)
            await uow.commit()

        logger.info("comment_added", post_id=str(post_id), comment_id=str(created.id))
        return created  # type: ignore[no-any-return]
