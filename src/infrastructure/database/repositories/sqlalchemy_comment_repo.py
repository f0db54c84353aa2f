"""SQLAlchemy implementation of Comment repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.comment import Comment
from domain.entities.profile import AuthorSummary
from infrastructure.database.models import CommentModel, ProfileModel


class SQLAlchemyCommentRepository:
    """SQLAlchemy implementation of ICommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_post(self, post_id: UUID) -> list[Comment]:
        """Get a post's comments with author summaries, oldest first."""
        stmt = (
            select(CommentModel, ProfileModel)
            .outerjoin(ProfileModel, ProfileModel.id == CommentModel.author_id)
            .where(CommentModel.post_id == post_id)
            .order_by(CommentModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(comment, profile) for comment, profile in result]

    async def create(self, comment: Comment) -> Comment:
        """Create a new comment."""
        model = CommentModel(
            id=comment.id,
            post_id=comment.post_id,
            author_id=comment.author_id,
            content=comment.content,
            created_at=comment.created_at,
        )
        self._session.add(model)
        await self._session.flush()

        profile = await self._session.get(ProfileModel, comment.author_id)
        return self._to_entity(model, profile)

    def _to_entity(self, model: CommentModel, profile: ProfileModel | None) -> Comment:
        """Convert ORM model to domain entity."""
        return Comment(
            id=model.id,
            post_id=model.post_id,
            author_id=model.author_id,
            content=model.content,
            created_at=model.created_at,
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
