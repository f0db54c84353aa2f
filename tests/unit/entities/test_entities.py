"""Unit tests for domain entity helpers."""

from datetime import datetime
from uuid import uuid4

import pytest

from domain.entities.post import Post, normalize_tags
from domain.entities.profile import Profile, default_profile_name


class TestNormalizeTags:
    def test_none_and_empty(self) -> None:
        assert normalize_tags(None) == []
        assert normalize_tags([]) == []

    def test_trims_and_drops_blanks(self) -> None:
        assert normalize_tags(["  a ", "", "   ", "b"]) == ["a", "b"]

    def test_dedupes_case_insensitively_keeping_first(self) -> None:
        assert normalize_tags(["Python", "python", "PYTHON", "go"]) == ["Python", "go"]


class TestPost:
    def test_defaults(self) -> None:
        author = uuid4()
        post = Post(author_id=author, title="T", content="C")

        assert post.likes == 0
        assert post.views == 0
        assert post.tags == []
        assert post.image is None
        assert post.author_id == author
        assert post.author is None

    def test_tags_normalized_on_construction(self) -> None:
        post = Post(author_id=uuid4(), title="T", content="C", tags=[" x ", "X"])

        assert post.tags == ["x"]

    def test_touch_moves_updated_at_forward(self) -> None:
        post = Post(author_id=uuid4(), title="T", content="C")
        before = post.updated_at

        post.touch()

        assert post.updated_at >= before


class TestProfile:
    @pytest.mark.parametrize(
        ("email", "display_name", "expected"),
        [
            ("ada@example.com", None, "ada"),
            ("ada@example.com", "  Ada Lovelace ", "Ada Lovelace"),
            ("ada@example.com", "   ", "ada"),
            (None, None, "Anonymous"),
        ],
    )
    def test_default_profile_name(
        self, email: str | None, display_name: str | None, expected: str
    ) -> None:
        assert default_profile_name(email, display_name) == expected

    def test_updated_at_never_precedes_created_at(self) -> None:
        created = datetime(2026, 1, 2, 12, 0, 0)

        profile = Profile(
            id=uuid4(), name="Ada", created_at=created, updated_at=datetime(2026, 1, 1)
        )

        assert profile.updated_at == created
