"""Unit tests for LikeService."""

from datetime import datetime
from uuid import uuid4

import pytest

from commentary.domain.error import NotFoundError, UnauthorizedError
from commentary.domain.repository import CommentRepository, LikeRepository
from commentary.domain.service import LikeService
from commentary.domain.value import CommentId
from commentary.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import seed_comment, seed_post, seed_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestToggleLike:
    """Tests for toggle_like."""

    @pytest.mark.asyncio
    async def test_like_then_unlike(self, unit_env):
        """Toggling twice restores the original state and count."""
        # Arrange
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(LikeService)
        like_repo = await unit_env.get(LikeRepository)
        alice = seed_user(db)
        post = seed_post(db)
        comment = seed_comment(db, post, author=alice)

        # Act
        liked = await service.toggle_like(comment.id, alice.id)

        # Assert
        assert liked.liked is True
        assert liked.likes_count == 1
        assert await like_repo.exists(comment.id, alice.id)

        unliked = await service.toggle_like(comment.id, alice.id)

        assert unliked.liked is False
        assert unliked.likes_count == 0
        assert not await like_repo.exists(comment.id, alice.id)

    @pytest.mark.asyncio
    async def test_count_matches_ledger_across_users(self, unit_env):
        """likes_count always equals the number of ledger rows."""
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(LikeService)
        like_repo = await unit_env.get(LikeRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = seed_post(db)
        users = [seed_user(db, f"user{i}") for i in range(4)]
        comment = seed_comment(db, post, author=users[0])

        for user in users:
            await service.toggle_like(comment.id, user.id)
        await service.toggle_like(comment.id, users[1].id)

        stored = await comment_repo.find_by_id(comment.id)
        assert stored.likes_count == 3
        assert await like_repo.count_by_comment(comment.id) == 3

    @pytest.mark.asyncio
    async def test_anonymous_cannot_like(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(LikeService)
        post = seed_post(db)
        comment = seed_comment(db, post)

        with pytest.raises(UnauthorizedError):
            await service.toggle_like(comment.id, None)

        assert db.comments[comment.id].likes_count == 0

    @pytest.mark.asyncio
    async def test_unknown_comment_raises(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(LikeService)
        alice = seed_user(db)

        with pytest.raises(NotFoundError):
            await service.toggle_like(CommentId(uuid4()), alice.id)

    @pytest.mark.asyncio
    async def test_trashed_comment_can_still_be_liked(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(LikeService)
        alice = seed_user(db)
        post = seed_post(db)
        comment = seed_comment(db, post, deleted_at=datetime.now())

        status = await service.toggle_like(comment.id, alice.id)

        assert status.liked is True
        assert status.likes_count == 1


class TestLikeStatus:
    """Tests for get_like_status and get_liked_comment_ids."""

    @pytest.mark.asyncio
    async def test_status_for_anonymous_viewer(self, unit_env):
        """Anonymous viewers never like anything but still see the count."""
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(LikeService)
        alice = seed_user(db)
        post = seed_post(db)
        comment = seed_comment(db, post)
        await service.toggle_like(comment.id, alice.id)

        status = await service.get_like_status(comment.id)

        assert status.liked is False
        assert status.likes_count == 1

    @pytest.mark.asyncio
    async def test_status_for_liker(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(LikeService)
        alice = seed_user(db)
        post = seed_post(db)
        comment = seed_comment(db, post)
        await service.toggle_like(comment.id, alice.id)

        status = await service.get_like_status(comment.id, alice.id)

        assert status.liked is True

    @pytest.mark.asyncio
    async def test_liked_ids_only_include_liked_comments(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(LikeService)
        alice = seed_user(db)
        post = seed_post(db)
        first = seed_comment(db, post)
        second = seed_comment(db, post)
        await service.toggle_like(second.id, alice.id)

        liked = await service.get_liked_comment_ids(alice.id, [first.id, second.id])

        assert liked == {second.id}
