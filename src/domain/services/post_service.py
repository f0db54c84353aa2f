"""Post service layer with ownership and engagement rules."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.config import settings
from core.exceptions import (
    AuthorizationError,
    NotPostAuthorError,
    PostNotFoundError,
    ValidationError,
)
from domain.entities.post import Post, PostCounters, PostDetail, normalize_tags
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic.

    Every mutation re-reads the stored ``author_id`` and compares it with the
    identity resolved from the caller's token. Identifiers supplied in request
    bodies never take part in that decision.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_posts(
        self, query: str | None = None, tag: str | None = None
    ) -> list[Post]:
        """Get all posts, newest first, optionally filtered.

        ``query`` is matched case-insensitively against title, content, tags
        and author name; ``tag`` must equal one of the post's tags.
        """
        async with self._uow_factory() as uow:
            posts = await uow.posts.list_all()

        if tag and tag.strip():
            wanted = tag.strip().lower()
            posts = [p for p in posts if wanted in (t.lower() for t in p.tags)]
        if query and query.strip():
            posts = [p for p in posts if _matches(p, query.strip().lower())]
        return posts

    async def list_posts_by_author(self, author_id: UUID, requester_id: UUID) -> list[Post]:
        """Get an author's posts, newest first. Only the author may ask."""
        if author_id != requester_id:
            raise AuthorizationError("You can only list your own posts")
        async with self._uow_factory() as uow:
            return await uow.posts.list_by_author(author_id)  # type: ignore[no-any-return]

    async def get_post(self, post_id: UUID) -> PostDetail:
        """Get a post with its comments, counting the retrieval as a view."""
        async with self._uow_factory() as uow:
            counters = await uow.posts.increment_views(post_id)
            if not counters:
                raise PostNotFoundError(str(post_id))

            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            comments = await uow.comments.list_for_post(post_id)

            await uow.commit()

            return PostDetail(post=post, comments=comments)

    async def create_post(
        self,
        author_id: UUID,
        title: str,
        content: str,
        tags: list[str] | None = None,
        image: str | None = None,
    ) -> Post:
        """Create a post owned by ``author_id`` with zeroed counters."""
        title = _require_text(title, "title")
        _require_text(content, "content")
        normalized = _check_tags(tags)

        post = Post(
            author_id=author_id,
            title=title,
            content=content,
            tags=normalized,
            image=image or None,
        )

        async with self._uow_factory() as uow:
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), author_id=str(author_id))
        return created  # type: ignore[no-any-return]

    async def update_post(
        self,
        post_id: UUID,
        user_id: UUID,
        title: str | None = None,
        content: str | None = None,
        tags: object = ...,  # Sentinel to detect explicit None
        image: object = ...,
    ) -> Post:
        """Overwrite the supplied fields of a post the caller wrote."""
        async with self._uow_factory() as uow:
            await self._require_author(uow, post_id, user_id, action="update")

            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            if title is not None:
                post.title = _require_text(title, "title")
            if content is not None:
                _require_text(content, "content")
                post.content = content
            if tags is not ...:
                post.tags = _check_tags(tags)  # type: ignore[arg-type]
            if image is not ...:
                post.image = image or None  # type: ignore[assignment]

            post.touch()

            updated = await uow.posts.update(post)
            await uow.commit()

        logger.info("post_updated", post_id=str(post_id))
        return updated  # type: ignore[no-any-return]

    async def delete_post(self, post_id: UUID, user_id: UUID) -> bool:
        """Delete a post the caller wrote, together with its comments."""
        async with self._uow_factory() as uow:
            await self._require_author(uow, post_id, user_id, action="delete")

            deleted = await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id))
        return deleted  # type: ignore[no-any-return]

    async def like_post(self, post_id: UUID, user_id: UUID) -> PostCounters:
        """Add one like to a post.

        Likes are not deduplicated per user: each call increments.
        """
        async with self._uow_factory() as uow:
            counters = await uow.posts.increment_likes(post_id)
            if not counters:
                raise PostNotFoundError(str(post_id))
            await uow.commit()

        logger.info("post_liked", post_id=str(post_id), user_id=str(user_id))
        return counters

    async def _require_author(
        self, uow: IUnitOfWork, post_id: UUID, user_id: UUID, action: str
    ) -> None:
        """Verify the caller is the stored author of the post."""
        author_id = await uow.posts.get_author_id(post_id)
        if author_id is None:
            raise PostNotFoundError(str(post_id))
        if author_id != user_id:
            logger.warning(
                "post_ownership_denied",
                post_id=str(post_id),
                user_id=str(user_id),
                action=action,
            )
            raise NotPostAuthorError(str(post_id), action=action)


def _require_text(value: str | None, field: str) -> str:
    """Reject missing or blank text, returning it trimmed."""
    if value is None or not value.strip():
        raise ValidationError(f"{field.capitalize()} is required", field=field)
    return value.strip()


def _check_tags(tags: list[str] | None) -> list[str]:
    normalized = normalize_tags(tags)
    if len(normalized) > settings.max_tags_per_post:
        raise ValidationError(
            f"A post can have at most {settings.max_tags_per_post} tags",
            field="tags",
        )
    return normalized


def _matches(post: Post, needle: str) -> bool:
    haystack = [post.title, post.content, *post.tags]
    if post.author:
        haystack.append(post.author.name)
    return any(needle in text.lower() for text in haystack)
