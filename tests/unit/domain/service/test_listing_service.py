"""Unit tests for ListingService."""

from datetime import datetime
from uuid import uuid4

import pytest

from commentary.domain.error import NotFoundError, ValidationError
from commentary.domain.service import LikeService, ListingService, ReportService
from commentary.domain.value import (
    CommentSortOrder,
    CommentStatus,
    PostId,
    ReportAction,
    ReportStatus,
)
from commentary.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import at, seed_comment, seed_post, seed_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListPostComments:
    """Tests for the public post listing."""

    @pytest.mark.asyncio
    async def test_only_approved_active_comments_are_visible(self, unit_env):
        """Pending and trashed comments never reach the public page."""
        # Arrange
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        post = seed_post(db)
        visible = seed_comment(db, post, created_at=at(1))
        seed_comment(db, post, status=CommentStatus.PENDING, created_at=at(2))
        seed_comment(db, post, deleted_at=at(4), created_at=at(3))
        visible_reply = seed_comment(db, post, root=visible, created_at=at(5))
        seed_comment(
            db, post, root=visible, status=CommentStatus.PENDING, created_at=at(6)
        )
        seed_comment(db, post, root=visible, deleted_at=at(8), created_at=at(7))

        # Act
        page = await service.list_post_comments(post.id)

        # Assert
        assert page.total == 1
        [thread] = page.items
        assert thread.comment.id == visible.id
        assert [r.comment.id for r in thread.replies] == [visible_reply.id]

    @pytest.mark.asyncio
    async def test_pinned_first_then_newest(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        post = seed_post(db)
        old_pinned = seed_comment(db, post, created_at=at(1), is_pinned=True)
        middle = seed_comment(db, post, created_at=at(2))
        newest = seed_comment(db, post, created_at=at(3))

        page = await service.list_post_comments(post.id)

        assert [t.comment.id for t in page.items] == [
            old_pinned.id,
            newest.id,
            middle.id,
        ]

    @pytest.mark.asyncio
    async def test_oldest_and_popular_orders(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        post = seed_post(db)
        first = seed_comment(db, post, created_at=at(1), likes_count=1)
        second = seed_comment(db, post, created_at=at(2), likes_count=5)
        third = seed_comment(db, post, created_at=at(3), likes_count=1)

        oldest = await service.list_post_comments(post.id, sort=CommentSortOrder.OLDEST)
        popular = await service.list_post_comments(
            post.id, sort=CommentSortOrder.POPULAR
        )

        assert [t.comment.id for t in oldest.items] == [first.id, second.id, third.id]
        assert [t.comment.id for t in popular.items] == [second.id, third.id, first.id]

    @pytest.mark.asyncio
    async def test_replies_are_oldest_first(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        post = seed_post(db)
        root = seed_comment(db, post, created_at=at(0))
        late = seed_comment(db, post, root=root, created_at=at(9))
        early = seed_comment(db, post, root=root, created_at=at(1))

        page = await service.list_post_comments(post.id)

        assert [r.comment.id for r in page.items[0].replies] == [early.id, late.id]

    @pytest.mark.asyncio
    async def test_paging_counts_top_level_only(self, unit_env):
        """Replies ride along with their thread and never consume page slots."""
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        post = seed_post(db)
        roots = [seed_comment(db, post, created_at=at(i)) for i in range(5)]
        for i in range(3):
            seed_comment(db, post, root=roots[4], created_at=at(10 + i))

        first = await service.list_post_comments(post.id, page=1, limit=2)
        last = await service.list_post_comments(post.id, page=3, limit=2)

        assert first.total == 5
        assert first.total_pages == 3
        assert first.has_next and not first.has_prev
        assert len(first.items) == 2
        assert len(first.items[0].replies) == 3
        assert [t.comment.id for t in last.items] == [roots[0].id]
        assert not last.has_next

    @pytest.mark.asyncio
    async def test_is_liked_reflects_viewer(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        like_service = await unit_env.get(LikeService)
        alice = seed_user(db)
        post = seed_post(db)
        root = seed_comment(db, post, created_at=at(0))
        reply = seed_comment(db, post, root=root, created_at=at(1))
        await like_service.toggle_like(reply.id, alice.id)

        as_alice = await service.list_post_comments(post.id, viewer_id=alice.id)
        as_anonymous = await service.list_post_comments(post.id)

        thread = as_alice.items[0]
        assert thread.is_liked is False
        assert thread.replies[0].is_liked is True
        assert thread.replies[0].comment.likes_count == 1
        assert as_anonymous.items[0].replies[0].is_liked is False

    @pytest.mark.asyncio
    async def test_unknown_or_deleted_post_raises(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        deleted = db.add_post(
            seed_post(db).model_copy(update={"deleted_at": datetime.now()})
        )

        with pytest.raises(NotFoundError):
            await service.list_post_comments(PostId(uuid4()))
        with pytest.raises(NotFoundError):
            await service.list_post_comments(deleted.id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, 101)])
    async def test_out_of_range_paging_is_rejected(self, unit_env, page, limit):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        post = seed_post(db)

        with pytest.raises(ValidationError):
            await service.list_post_comments(post.id, page=page, limit=limit)


class TestAdminListings:
    """Tests for the moderation listings."""

    @pytest.mark.asyncio
    async def test_list_comments_filters_status_and_hides_trash(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        post = seed_post(db)
        pending = seed_comment(db, post, status=CommentStatus.PENDING, created_at=at(1))
        approved = seed_comment(db, post, created_at=at(2))
        seed_comment(db, post, status=CommentStatus.PENDING, deleted_at=at(3))

        everything = await service.list_comments()
        only_pending = await service.list_comments(status=CommentStatus.PENDING)

        assert [c.id for c in everything.items] == [approved.id, pending.id]
        assert [c.id for c in only_pending.items] == [pending.id]

    @pytest.mark.asyncio
    async def test_list_comments_search_matches_content_and_author(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        zed = seed_user(db, "zed")
        post = seed_post(db)
        by_content = seed_comment(db, post, content="Great ZED article", created_at=at(1))
        by_author = seed_comment(db, post, author=zed, content="Hello", created_at=at(2))
        seed_comment(db, post, content="Unrelated")

        page = await service.list_comments(search="zed")

        assert {c.id for c in page.items} == {by_content.id, by_author.id}

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        post = seed_post(db)
        match = seed_comment(db, post, content="100% agree")
        seed_comment(db, post, content="100 percent agree")

        page = await service.list_comments(search="0%")

        assert [c.id for c in page.items] == [match.id]

    @pytest.mark.asyncio
    async def test_list_trash_is_most_recently_trashed_first(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        post = seed_post(db)
        seed_comment(db, post)
        earlier = seed_comment(db, post, created_at=at(5), deleted_at=at(10))
        later = seed_comment(db, post, created_at=at(1), deleted_at=at(20))

        page = await service.list_trash()

        assert [c.id for c in page.items] == [later.id, earlier.id]
        assert page.total == 2

    @pytest.mark.asyncio
    async def test_list_reports_defaults_to_pending(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        report_service = await unit_env.get(ReportService)
        alice = seed_user(db)
        post = seed_post(db)
        comment = seed_comment(db, post)
        open_report = await report_service.report_comment(comment.id, alice.id, "spam")
        closed = await report_service.report_comment(comment.id, alice.id, "other")
        await report_service.resolve_report(closed.id, ReportAction.DISMISS)

        pending = await service.list_reports()
        dismissed = await service.list_reports(status=ReportStatus.DISMISSED)
        everything = await service.list_reports(status=None)

        assert [r.id for r in pending.items] == [open_report.id]
        assert [r.id for r in dismissed.items] == [closed.id]
        assert everything.total == 2

    @pytest.mark.asyncio
    async def test_stats(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ListingService)
        report_service = await unit_env.get(ReportService)
        alice = seed_user(db)
        post = seed_post(db)
        seed_comment(db, post, status=CommentStatus.PENDING)
        approved = seed_comment(db, post)
        seed_comment(db, post)
        seed_comment(db, post, deleted_at=datetime.now())
        await report_service.report_comment(approved.id, alice.id, "spam")

        stats = await service.get_stats()

        assert stats.total == 3
        assert stats.pending == 1
        assert stats.approved == 2
        assert stats.trashed == 1
        assert stats.pending_reports == 1
