"""SQLAlchemy implementation of Post repository."""

from uuid import UUID

from sqlalchemy import Select, Update, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Post, PostCounters
from domain.entities.profile import AuthorSummary
from infrastructure.database.models import CommentModel, PostModel, ProfileModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID, joined with its author's profile."""
        stmt = (
            self._select_with_author()
            .where(PostModel.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        return self._to_entity(row[0], row[1]) if row else None

    async def get_author_id(self, id: UUID) -> UUID | None:
        """Read the stored author of a post."""
        stmt = select(PostModel.author_id).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Post]:
        """Get all posts, newest first."""
        stmt = self._select_with_author().order_by(PostModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(post, profile) for post, profile in result]

    async def list_by_author(self, author_id: UUID) -> list[Post]:
        """Get all posts by one author, newest first."""
        stmt = (
            self._select_with_author()
            .where(PostModel.author_id == author_id)
            .order_by(PostModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(post, profile) for post, profile in result]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = self._to_model(post)
        self._session.add(model)
        await self._session.flush()
        created = await self.get(model.id)
        if not created:
            raise ValueError(f"Post {post.id} not found after insert")
        return created

    async def update(self, post: Post) -> Post:
        """Update the editable fields of an existing post.

        ``author_id`` and the counters are never written here.
        """
        stmt = select(PostModel).where(PostModel.id == post.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Post {post.id} not found")

        model.title = post.title
        model.content = post.content
        model.tags = list(post.tags)
        model.image = post.image
        model.updated_at = post.updated_at

        await self._session.flush()
        updated = await self.get(post.id)
        if not updated:
            raise ValueError(f"Post {post.id} not found")
        return updated

    async def delete(self, id: UUID) -> bool:
        """Delete a post and its comments."""
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.execute(delete(CommentModel).where(CommentModel.post_id == id))
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def increment_likes(self, id: UUID) -> PostCounters | None:
        """Add one like with a single UPDATE statement."""
        stmt = update(PostModel).where(PostModel.id == id).values(likes=PostModel.likes + 1)
        return await self._increment(id, stmt)

    async def increment_views(self, id: UUID) -> PostCounters | None:
        """Add one view with a single UPDATE statement."""
        stmt = update(PostModel).where(PostModel.id == id).values(views=PostModel.views + 1)
        return await self._increment(id, stmt)

    async def _increment(self, id: UUID, stmt: Update) -> PostCounters | None:
        result = await self._session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            return None

        counters = await self._session.execute(
            select(PostModel.likes, PostModel.views).where(PostModel.id == id)
        )
        likes, views = counters.one()
        return PostCounters(id=id, likes=likes, views=views)

    def _select_with_author(self) -> Select[tuple[PostModel, ProfileModel]]:
        # Outer join: a post whose author has no profile row yet is still listed.
        return select(PostModel, ProfileModel).outerjoin(
            ProfileModel, ProfileModel.id == PostModel.author_id
        )

    def _to_entity(self, model: PostModel, profile: ProfileModel | None) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            author_id=model.author_id,
            title=model.title,
            content=model.content,
            tags=list(model.tags or []),
            image=model.image,
            likes=model.likes,
            views=model.views,
            created_at=model.created_at,
            updated_at=model.updated_at,
            author=(
                AuthorSummary(
                    id=profile.id,
                    name=profile.name,
                    profile_picture=profile.profile_picture,
                )
                if profile
                else None
            ),
        )

    def _to_model(self, entity: Post) -> PostModel:
        """Convert domain entity to ORM model."""
        return PostModel(
            id=entity.id,
            author_id=entity.author_id,
            title=entity.title,
            content=entity.content,
            tags=list(entity.tags),
            image=entity.image,
            likes=entity.likes,
            views=entity.views,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
