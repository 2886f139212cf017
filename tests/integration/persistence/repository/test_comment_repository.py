"""Integration tests for the PostgreSQL comment and like repositories.

These tests verify enum mapping, the like ledger constraint and
savepoint behaviour against a real database, and that concurrent like
toggles keep the counter in step with the ledger.
"""

import asyncio
from datetime import datetime, timedelta
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.adapter.notification.relay import RecordingEventPublisher
from commentary.domain.model import Comment, Like
from commentary.domain.repository import (
    CommentCriteria,
    CommentOrder,
    CommentRepository,
    LikeRepository,
)
from commentary.domain.service import CommentService, LikeService
from commentary.domain.value import (
    CommentId,
    CommentStatus,
    LikeId,
    PostId,
    UserId,
    Username,
)
from commentary.persistence.tables import posts_table, users_table
from tests.di import build_test_container
from tests.harness import create_env_fixture

# Integration test fixture - real persistence, assumes postgres running
integration_env = create_env_fixture(unmock={"persistence"})


async def _seed(session: AsyncSession) -> tuple[UserId, PostId]:
    user_id = UserId(uuid4())
    post_id = PostId(uuid4())
    await session.execute(
        users_table.insert().values(id=user_id, username=f"user-{str(user_id)[:8]}")
    )
    await session.execute(
        posts_table.insert().values(
            id=post_id, title="Integration", slug=f"integration-{post_id}"
        )
    )
    return user_id, post_id


def _comment(post_id: PostId, user_id: UserId, **overrides) -> Comment:
    fields = dict(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=user_id,
        author_username=Username("integration"),
        content="Stored in postgres",
    )
    fields.update(overrides)
    return Comment(**fields)


class TestPostgresCommentRepository:
    """Integration tests for PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_save_and_reload_round_trips_status(self, integration_env):
        session = await integration_env.get(AsyncSession)
        repo = await integration_env.get(CommentRepository)
        user_id, post_id = await _seed(session)

        saved = await repo.save(
            _comment(post_id, user_id, status=CommentStatus.APPROVED)
        )
        loaded = await repo.find_by_id(saved.id)

        assert loaded is not None
        assert loaded.status == CommentStatus.APPROVED
        assert loaded.author_username == Username("integration")

    @pytest.mark.asyncio
    async def test_find_orders_and_filters_replies(self, integration_env):
        session = await integration_env.get(AsyncSession)
        repo = await integration_env.get(CommentRepository)
        user_id, post_id = await _seed(session)
        base = datetime(2026, 1, 1, 12, 0)
        root = await repo.save(_comment(post_id, user_id, created_at=base))
        late = await repo.save(
            _comment(
                post_id,
                user_id,
                root_id=root.id,
                reply_to_id=root.id,
                created_at=base + timedelta(minutes=2),
            )
        )
        early = await repo.save(
            _comment(
                post_id,
                user_id,
                root_id=root.id,
                reply_to_id=root.id,
                created_at=base + timedelta(minutes=1),
            )
        )

        replies = await repo.find(
            CommentCriteria(root_ids=(root.id,)), order=CommentOrder.OLDEST
        )
        roots = await repo.find(CommentCriteria(post_id=post_id, top_level_only=True))

        assert [c.id for c in replies] == [early.id, late.id]
        assert [c.id for c in roots] == [root.id]

    @pytest.mark.asyncio
    async def test_search_escapes_wildcards(self, integration_env):
        session = await integration_env.get(AsyncSession)
        repo = await integration_env.get(CommentRepository)
        user_id, post_id = await _seed(session)
        match = await repo.save(_comment(post_id, user_id, content="100% agree"))
        await repo.save(_comment(post_id, user_id, content="1000 agree"))

        found = await repo.find(CommentCriteria(post_id=post_id, search="0%"))

        assert [c.id for c in found] == [match.id]

    @pytest.mark.asyncio
    async def test_failed_savepoint_keeps_earlier_work(self, integration_env):
        session = await integration_env.get(AsyncSession)
        repo = await integration_env.get(CommentRepository)
        user_id, post_id = await _seed(session)
        kept = await repo.save(_comment(post_id, user_id))
        doomed = _comment(post_id, user_id)

        with pytest.raises(RuntimeError):
            async with repo.transaction():
                await repo.save(doomed)
                raise RuntimeError("abort this unit of work")

        assert await repo.find_by_id(kept.id) is not None
        assert await repo.find_by_id(doomed.id) is None


class TestPostgresLikeRepository:
    """Integration tests for PostgresLikeRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_like_is_ignored(self, integration_env):
        session = await integration_env.get(AsyncSession)
        comments = await integration_env.get(CommentRepository)
        likes = await integration_env.get(LikeRepository)
        user_id, post_id = await _seed(session)
        comment = await comments.save(_comment(post_id, user_id))

        first = await likes.add(
            Like(id=LikeId(uuid4()), comment_id=comment.id, user_id=user_id)
        )
        second = await likes.add(
            Like(id=LikeId(uuid4()), comment_id=comment.id, user_id=user_id)
        )
        count = await comments.adjust_likes_count(comment.id, 1)

        assert first is True
        assert second is False
        assert await likes.count_by_comment(comment.id) == 1
        assert count == 1


@pytest_asyncio.fixture
async def integration_app():
    # Each toggle below needs its own request scope, so its own session
    container = build_test_container(unmock={"persistence"})
    yield container
    await container.close()


async def _seed_users(container, count: int) -> list[UserId]:
    user_ids = [UserId(uuid4()) for _ in range(count)]
    async with container() as request_container:
        session = await request_container.get(AsyncSession)
        for user_id in user_ids:
            await session.execute(
                users_table.insert().values(
                    id=user_id, username=f"user-{str(user_id)[:8]}"
                )
            )
    return user_ids


async def _seed_comment(container, author_id: UserId) -> CommentId:
    async with container() as request_container:
        session = await request_container.get(AsyncSession)
        comments = await request_container.get(CommentRepository)
        post_id = PostId(uuid4())
        await session.execute(
            posts_table.insert().values(
                id=post_id, title="Concurrency", slug=f"concurrency-{post_id}"
            )
        )
        comment = await comments.save(_comment(post_id, author_id))
    return comment.id


async def _toggle(container, comment_id: CommentId, user_id: UserId) -> None:
    async with container() as request_container:
        service = await request_container.get(LikeService)
        await service.toggle_like(comment_id, user_id)


async def _counts(container, comment_id: CommentId) -> tuple[int, int]:
    async with container() as request_container:
        comments = await request_container.get(CommentRepository)
        likes = await request_container.get(LikeRepository)
        comment = await comments.find_by_id(comment_id)
        return comment.likes_count, await likes.count_by_comment(comment_id)


class TestConcurrentLikeToggles:
    """Concurrent toggles on one comment serialize on the comment row lock."""

    @pytest.mark.asyncio
    async def test_toggles_by_different_users_all_count(self, integration_app):
        user_ids = await _seed_users(integration_app, 8)
        comment_id = await _seed_comment(integration_app, user_ids[0])

        await asyncio.gather(
            *(_toggle(integration_app, comment_id, user_id) for user_id in user_ids)
        )

        likes_count, ledger_rows = await _counts(integration_app, comment_id)
        assert ledger_rows == 8
        assert likes_count == ledger_rows

    @pytest.mark.asyncio
    async def test_even_toggles_by_one_user_cancel_out(self, integration_app):
        (user_id,) = await _seed_users(integration_app, 1)
        comment_id = await _seed_comment(integration_app, user_id)

        await asyncio.gather(
            *(_toggle(integration_app, comment_id, user_id) for _ in range(6))
        )

        likes_count, ledger_rows = await _counts(integration_app, comment_id)
        assert ledger_rows == 0
        assert likes_count == 0

    @pytest.mark.asyncio
    async def test_odd_toggles_by_one_user_leave_one_like(self, integration_app):
        (user_id,) = await _seed_users(integration_app, 1)
        comment_id = await _seed_comment(integration_app, user_id)

        await asyncio.gather(
            *(_toggle(integration_app, comment_id, user_id) for _ in range(5))
        )

        likes_count, ledger_rows = await _counts(integration_app, comment_id)
        assert ledger_rows == 1
        assert likes_count == 1


class TestEventsAfterCommit:
    """Events reach the notification layer only once the session commits."""

    @pytest.mark.asyncio
    async def test_comment_created_is_published_after_commit(self, integration_app):
        (user_id,) = await _seed_users(integration_app, 1)
        parent_id = await _seed_comment(integration_app, user_id)
        recorder = await integration_app.get(RecordingEventPublisher)
        recorder.clear()

        async with integration_app() as request_container:
            comments = await request_container.get(CommentRepository)
            service = await request_container.get(CommentService)
            parent = await comments.find_by_id(parent_id)
            reply = await service.create_comment(
                post_id=parent.post_id,
                author_id=user_id,
                content="Published once committed",
                parent_id=parent_id,
            )

            assert recorder.events == []

        assert recorder.names() == ["comment.created"]
        assert recorder.events[0].comment.id == reply.id
