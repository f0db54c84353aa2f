"""Unit tests for Post service layer."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AuthorizationError,
    NotPostAuthorError,
    PostNotFoundError,
    ValidationError,
)
from domain.entities.comment import Comment
from domain.entities.post import Post, PostCounters
from domain.entities.profile import AuthorSummary
from domain.services.post_service import PostService

# FakeUnitOfWork is provided by the shared conftest at tests/unit/conftest.py.
# Import it here only for type-hint usage in fixtures/tests.
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    return PostService(lambda: uow)


@pytest.fixture
def sample_post(user_id: UUID) -> Post:
    return Post(
        id=uuid4(),
        author_id=user_id,
        title="Hello",
        content="World of sufficient length",
        tags=["intro"],
    )


class TestPostServiceCreate:
    @pytest.mark.asyncio
    async def test_creates_post_with_zero_counters(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        """New posts start with zero likes and views and the caller as author."""
        uow.posts.create.side_effect = lambda post: post

        result = await service.create_post(
            author_id=user_id, title="Hello", content="World of sufficient length"
        )

        assert result.likes == 0
        assert result.views == 0
        assert result.author_id == user_id
        assert result.tags == []
        assert uow.committed

    @pytest.mark.asyncio
    async def test_normalizes_tags(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.posts.create.side_effect = lambda post: post

        result = await service.create_post(
            author_id=user_id,
            title="Tagged",
            content="Body",
            tags=[" python ", "", "Python", "fastapi"],
        )

        assert result.tags == ["python", "fastapi"]

    @pytest.mark.asyncio
    async def test_trims_title(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.posts.create.side_effect = lambda post: post

        result = await service.create_post(author_id=user_id, title="  Hello  ", content="x")

        assert result.title == "Hello"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("title", "content", "field"),
        [("", "content", "title"), ("   ", "content", "title"), ("Title", " \n", "content")],
    )
    async def test_blank_title_or_content_raises(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        title: str,
        content: str,
        field: str,
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.create_post(author_id=user_id, title=title, content=content)

        assert exc_info.value.details == {"field": field}
        uow.posts.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_too_many_tags_raises(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        tags = [f"tag-{i}" for i in range(100)]

        with pytest.raises(ValidationError):
            await service.create_post(author_id=user_id, title="T", content="C", tags=tags)

        uow.posts.create.assert_not_called()


class TestPostServiceGet:
    @pytest.mark.asyncio
    async def test_increments_views_and_returns_comments(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, user_id: UUID
    ) -> None:
        comment = Comment(post_id=sample_post.id, author_id=user_id, content="nice!")
        uow.posts.increment_views.return_value = PostCounters(
            id=sample_post.id, likes=0, views=1
        )
        uow.posts.get.return_value = sample_post
        uow.comments.list_for_post.return_value = [comment]

        detail = await service.get_post(sample_post.id)

        uow.posts.increment_views.assert_awaited_once_with(sample_post.id)
        assert detail.post is sample_post
        assert detail.comments == [comment]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_raises_when_not_found(
        self, service: PostService, uow: FakeUnitOfWork
    ) -> None:
        uow.posts.increment_views.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.get_post(uuid4())

        uow.comments.list_for_post.assert_not_called()
        assert not uow.committed


class TestPostServiceList:
    @pytest.mark.asyncio
    async def test_returns_repository_order(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        posts = [
            Post(author_id=user_id, title="C", content="c"),
            Post(author_id=user_id, title="B", content="b"),
            Post(author_id=user_id, title="A", content="a"),
        ]
        uow.posts.list_all.return_value = posts

        result = await service.list_posts()

        assert [p.title for p in result] == ["C", "B", "A"]

    @pytest.mark.asyncio
    async def test_filters_by_query_across_fields(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        by_title = Post(author_id=user_id, title="Async Python", content="x")
        by_tag = Post(author_id=user_id, title="Other", content="y", tags=["python"])
        by_author = Post(
            author_id=user_id,
            title="Third",
            content="z",
            author=AuthorSummary(id=user_id, name="Pythonista"),
        )
        unrelated = Post(author_id=user_id, title="Gardening", content="soil")
        uow.posts.list_all.return_value = [by_title, by_tag, by_author, unrelated]

        result = await service.list_posts(query="PYTHON")

        assert result == [by_title, by_tag, by_author]

    @pytest.mark.asyncio
    async def test_filters_by_tag(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        tagged = Post(author_id=user_id, title="T", content="c", tags=["FastAPI"])
        untagged = Post(author_id=user_id, title="U", content="fastapi in content")
        uow.posts.list_all.return_value = [tagged, untagged]

        result = await service.list_posts(tag="fastapi")

        assert result == [tagged]

    @pytest.mark.asyncio
    async def test_list_by_author_requires_self(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ) -> None:
        with pytest.raises(AuthorizationError):
            await service.list_posts_by_author(user_id, requester_id=other_user_id)

        uow.posts.list_by_author.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_by_author_for_self(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, sample_post: Post
    ) -> None:
        uow.posts.list_by_author.return_value = [sample_post]

        result = await service.list_posts_by_author(user_id, requester_id=user_id)

        assert result == [sample_post]
        uow.posts.list_by_author.assert_awaited_once_with(user_id)


class TestPostServiceUpdate:
    @pytest.mark.asyncio
    async def test_updates_only_supplied_fields(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, sample_post: Post
    ) -> None:
        original_updated_at = sample_post.updated_at
        uow.posts.get_author_id.return_value = user_id
        uow.posts.get.return_value = sample_post
        uow.posts.update.side_effect = lambda post: post

        result = await service.update_post(sample_post.id, user_id, title="Hello v2")

        assert result.title == "Hello v2"
        assert result.content == "World of sufficient length"
        assert result.tags == ["intro"]
        assert result.updated_at >= original_updated_at
        assert uow.committed

    @pytest.mark.asyncio
    async def test_explicit_none_clears_image_and_tags(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, sample_post: Post
    ) -> None:
        sample_post.image = "https://cdn.example.com/a.png"
        uow.posts.get_author_id.return_value = user_id
        uow.posts.get.return_value = sample_post
        uow.posts.update.side_effect = lambda post: post

        result = await service.update_post(sample_post.id, user_id, tags=None, image=None)

        assert result.tags == []
        assert result.image is None

    @pytest.mark.asyncio
    async def test_non_author_is_forbidden(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        other_user_id: UUID,
        sample_post: Post,
    ) -> None:
        uow.posts.get_author_id.return_value = user_id

        with pytest.raises(NotPostAuthorError):
            await service.update_post(sample_post.id, other_user_id, title="Hijack")

        uow.posts.update.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_missing_post_raises(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.posts.get_author_id.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.update_post(uuid4(), user_id, title="x")

    @pytest.mark.asyncio
    async def test_blank_title_rejected(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, sample_post: Post
    ) -> None:
        uow.posts.get_author_id.return_value = user_id
        uow.posts.get.return_value = sample_post

        with pytest.raises(ValidationError):
            await service.update_post(sample_post.id, user_id, title="   ")

        uow.posts.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_author_never_changes(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, sample_post: Post
    ) -> None:
        uow.posts.get_author_id.return_value = user_id
        uow.posts.get.return_value = sample_post
        uow.posts.update.side_effect = lambda post: post

        result = await service.update_post(sample_post.id, user_id, content="New body")

        assert result.author_id == user_id


class TestPostServiceDelete:
    @pytest.mark.asyncio
    async def test_author_can_delete(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, sample_post: Post
    ) -> None:
        uow.posts.get_author_id.return_value = user_id
        uow.posts.delete.return_value = True

        assert await service.delete_post(sample_post.id, user_id) is True
        uow.posts.delete.assert_awaited_once_with(sample_post.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_non_author_is_forbidden(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        other_user_id: UUID,
        sample_post: Post,
    ) -> None:
        uow.posts.get_author_id.return_value = user_id

        with pytest.raises(NotPostAuthorError) as exc_info:
            await service.delete_post(sample_post.id, other_user_id)

        assert exc_info.value.status_code == 403
        uow.posts.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_post_is_not_found(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.posts.get_author_id.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.delete_post(uuid4(), user_id)


class TestPostServiceLike:
    @pytest.mark.asyncio
    async def test_returns_updated_counters(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, sample_post: Post
    ) -> None:
        counters = PostCounters(id=sample_post.id, likes=1, views=0)
        uow.posts.increment_likes.return_value = counters

        result = await service.like_post(sample_post.id, user_id)

        assert result == counters
        assert uow.committed

    @pytest.mark.asyncio
    async def test_same_user_can_like_repeatedly(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, sample_post: Post
    ) -> None:
        uow.posts.increment_likes.side_effect = [
            PostCounters(id=sample_post.id, likes=1, views=0),
            PostCounters(id=sample_post.id, likes=2, views=0),
        ]

        await service.like_post(sample_post.id, user_id)
        result = await service.like_post(sample_post.id, user_id)

        assert result.likes == 2
        assert uow.posts.increment_likes.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_post_is_not_found(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.posts.increment_likes.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.like_post(uuid4(), user_id)
