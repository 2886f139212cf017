"""Unit tests for the in-memory repositories."""

from uuid import uuid4

import pytest

from commentary.domain.model import Like
from commentary.domain.repository import CommentCriteria
from commentary.domain.value import CommentStatus, LikeId
from commentary.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryLikeRepository,
)
from tests.conftest import at, seed_comment, seed_post, seed_user


class TestInMemoryCommentRepository:
    """Tests for InMemoryCommentRepository."""

    @pytest.mark.asyncio
    async def test_save_keeps_stored_likes_count(self):
        """Like counts only change through adjust_likes_count."""
        db = InMemoryDatabase()
        repo = InMemoryCommentRepository(db)
        post = seed_post(db)
        comment = seed_comment(db, post)
        await repo.adjust_likes_count(comment.id, 2)

        saved = await repo.save(comment.model_copy(update={"content": "Edited"}))

        assert saved.content == "Edited"
        assert saved.likes_count == 2

    @pytest.mark.asyncio
    async def test_trashed_criteria(self):
        db = InMemoryDatabase()
        repo = InMemoryCommentRepository(db)
        post = seed_post(db)
        active = seed_comment(db, post)
        trashed = seed_comment(db, post, deleted_at=at(1))

        assert [c.id for c in await repo.find(CommentCriteria())] == [active.id]
        assert [c.id for c in await repo.find(CommentCriteria(trashed=True))] == [
            trashed.id
        ]
        assert await repo.count(CommentCriteria(trashed=None)) == 2

    @pytest.mark.asyncio
    async def test_transaction_rolls_back_on_error(self):
        db = InMemoryDatabase()
        repo = InMemoryCommentRepository(db)
        post = seed_post(db)
        comment = seed_comment(db, post, status=CommentStatus.PENDING)

        with pytest.raises(RuntimeError):
            async with repo.transaction():
                await repo.save(comment.model_copy(update={"content": "Changed"}))
                raise RuntimeError("boom")

        assert (await repo.find_by_id(comment.id)).content == "A comment"

    @pytest.mark.asyncio
    async def test_delete_many_counts_removed_rows(self):
        db = InMemoryDatabase()
        repo = InMemoryCommentRepository(db)
        post = seed_post(db)
        comment = seed_comment(db, post)

        assert await repo.delete_many([comment.id, comment.id]) == 1
        assert await repo.find_by_id(comment.id) is None


class TestInMemoryLikeRepository:
    """Tests for InMemoryLikeRepository."""

    @pytest.mark.asyncio
    async def test_add_is_unique_per_comment_and_user(self):
        db = InMemoryDatabase()
        repo = InMemoryLikeRepository(db)
        alice = seed_user(db)
        comment = seed_comment(db, seed_post(db))

        first = await repo.add(
            Like(id=LikeId(uuid4()), comment_id=comment.id, user_id=alice.id)
        )
        second = await repo.add(
            Like(id=LikeId(uuid4()), comment_id=comment.id, user_id=alice.id)
        )

        assert first is True
        assert second is False
        assert await repo.count_by_comment(comment.id) == 1

    @pytest.mark.asyncio
    async def test_remove_missing_like(self):
        db = InMemoryDatabase()
        repo = InMemoryLikeRepository(db)
        alice = seed_user(db)
        comment = seed_comment(db, seed_post(db))

        assert await repo.remove(comment.id, alice.id) is False
