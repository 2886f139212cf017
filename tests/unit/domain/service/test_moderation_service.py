"""Unit tests for ModerationService."""

from datetime import datetime
from uuid import uuid4

import pytest

from commentary.adapter.notification.relay import RecordingEventPublisher
from commentary.config import CommentSettings
from commentary.domain.error import (
    InvalidOperationError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from commentary.domain.model import CommentStatusChanged
from commentary.domain.repository import CommentRepository
from commentary.domain.service import EventService, LikeService, ModerationService
from commentary.domain.value import (
    CommentId,
    CommentStatus,
    ModerationAction,
    ModerationState,
)
from commentary.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryLikeRepository,
    InMemoryReportRepository,
)
from tests.conftest import at, seed_comment, seed_post, seed_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _cascading_service(db: InMemoryDatabase) -> ModerationService:
    return ModerationService(
        comment_repository=InMemoryCommentRepository(db),
        like_repository=InMemoryLikeRepository(db),
        report_repository=InMemoryReportRepository(db),
        event_service=EventService(RecordingEventPublisher()),
        settings=CommentSettings(cascade_trash_to_replies=True),
    )


class TestApproveReject:
    """Tests for approve and reject."""

    @pytest.mark.asyncio
    async def test_approve_pending_comment(self, unit_env):
        """Approval publishes the comment and emits a status change."""
        # Arrange
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        recorder = await unit_env.get(RecordingEventPublisher)
        post = seed_post(db)
        comment = seed_comment(db, post, status=CommentStatus.PENDING)

        # Act
        approved = await service.approve(comment.id)

        # Assert
        assert approved.status == CommentStatus.APPROVED
        assert db.comments[comment.id].status == CommentStatus.APPROVED
        [event] = recorder.events
        assert isinstance(event, CommentStatusChanged)
        assert event.action == ModerationAction.APPROVE
        assert event.from_state == ModerationState.PENDING
        assert event.to_state == ModerationState.APPROVED

    @pytest.mark.asyncio
    async def test_approve_is_idempotent(self, unit_env):
        """Approving twice leaves the comment unchanged and emits once."""
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        recorder = await unit_env.get(RecordingEventPublisher)
        post = seed_post(db)
        comment = seed_comment(db, post, status=CommentStatus.PENDING)

        first = await service.approve(comment.id)
        second = await service.approve(comment.id)

        assert first == second
        assert len(recorder.events) == 1

    @pytest.mark.asyncio
    async def test_reject_returns_comment_to_review(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        comment = seed_comment(db, post, status=CommentStatus.APPROVED)

        rejected = await service.reject(comment.id)

        assert rejected.status == CommentStatus.PENDING
        assert not rejected.is_trashed

    @pytest.mark.asyncio
    async def test_trashed_comment_cannot_be_approved(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        comment = seed_comment(db, post, deleted_at=datetime.now())

        with pytest.raises(InvalidStateError):
            await service.approve(comment.id)

    @pytest.mark.asyncio
    async def test_unknown_comment_raises(self, unit_env):
        service = await unit_env.get(ModerationService)

        with pytest.raises(NotFoundError):
            await service.reject(CommentId(uuid4()))


class TestTrashLifecycle:
    """Tests for soft_delete, restore and permanent_delete."""

    @pytest.mark.asyncio
    async def test_soft_delete_then_restore_lands_in_pending(self, unit_env):
        """An approved comment comes back from the trash unpublished."""
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        comment = seed_comment(db, post, status=CommentStatus.APPROVED)

        trashed = await service.soft_delete(comment.id)
        assert trashed.is_trashed

        restored = await service.restore(comment.id)

        assert restored.deleted_at is None
        assert restored.status == CommentStatus.PENDING

    @pytest.mark.asyncio
    async def test_soft_delete_twice_is_rejected(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        comment = seed_comment(db, post)
        await service.soft_delete(comment.id)

        with pytest.raises(InvalidStateError):
            await service.soft_delete(comment.id)

    @pytest.mark.asyncio
    async def test_restore_requires_trash(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        comment = seed_comment(db, post)

        with pytest.raises(InvalidStateError):
            await service.restore(comment.id)

    @pytest.mark.asyncio
    async def test_permanent_delete_requires_trash(self, unit_env):
        """Active comments cannot be purged directly."""
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        comment = seed_comment(db, post, status=CommentStatus.APPROVED)

        with pytest.raises(InvalidStateError):
            await service.permanent_delete(comment.id)

        assert comment.id in db.comments

    @pytest.mark.asyncio
    async def test_permanent_delete_purges_thread_likes_and_reports(self, unit_env):
        """Purging a root takes its replies and their ledger rows with it."""
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        like_service = await unit_env.get(LikeService)
        recorder = await unit_env.get(RecordingEventPublisher)
        alice = seed_user(db)
        post = seed_post(db)
        root = seed_comment(db, post)
        reply = seed_comment(db, post, root=root)
        survivor = seed_comment(db, post)
        await like_service.toggle_like(reply.id, alice.id)
        await like_service.toggle_like(survivor.id, alice.id)
        await service.soft_delete(root.id)
        recorder.clear()

        purged = await service.permanent_delete(root.id)

        assert set(purged) == {root.id, reply.id}
        assert root.id not in db.comments
        assert reply.id not in db.comments
        assert survivor.id in db.comments
        assert [like.comment_id for like in db.likes.values()] == [survivor.id]
        [event] = recorder.events
        assert event.to_state == ModerationState.PURGED

    @pytest.mark.asyncio
    async def test_permanent_delete_of_reply_keeps_root(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        root = seed_comment(db, post)
        reply = seed_comment(db, post, root=root, deleted_at=datetime.now())

        purged = await service.permanent_delete(reply.id)

        assert purged == [reply.id]
        assert root.id in db.comments

    @pytest.mark.asyncio
    async def test_replies_untouched_without_cascade(self, unit_env):
        """By default trashing a root leaves its replies active."""
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        root = seed_comment(db, post)
        reply = seed_comment(db, post, root=root)

        await service.soft_delete(root.id)

        assert not db.comments[reply.id].is_trashed


class TestCascadePolicy:
    """Tests for cascade_trash_to_replies."""

    @pytest.mark.asyncio
    async def test_soft_delete_cascades_to_active_replies(self):
        db = InMemoryDatabase()
        service = _cascading_service(db)
        post = seed_post(db)
        root = seed_comment(db, post)
        reply = seed_comment(db, post, root=root)

        trashed = await service.soft_delete(root.id)

        assert db.comments[reply.id].deleted_at == trashed.deleted_at

    @pytest.mark.asyncio
    async def test_restore_only_brings_back_cascaded_replies(self):
        """Replies trashed on their own stay in the trash."""
        db = InMemoryDatabase()
        service = _cascading_service(db)
        post = seed_post(db)
        root = seed_comment(db, post)
        cascaded = seed_comment(db, post, root=root)
        trashed_earlier = seed_comment(db, post, root=root, deleted_at=at(0))

        await service.soft_delete(root.id)
        await service.restore(root.id)

        assert not db.comments[cascaded.id].is_trashed
        assert db.comments[cascaded.id].status == CommentStatus.PENDING
        assert db.comments[trashed_earlier.id].deleted_at == at(0)


class TestTogglePin:
    """Tests for toggle_pin."""

    @pytest.mark.asyncio
    async def test_pin_and_unpin(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        comment = seed_comment(db, post)

        assert (await service.toggle_pin(comment.id)).is_pinned is True
        assert (await service.toggle_pin(comment.id)).is_pinned is False

    @pytest.mark.asyncio
    async def test_reply_cannot_be_pinned(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        root = seed_comment(db, post)
        reply = seed_comment(db, post, root=root)

        with pytest.raises(InvalidOperationError):
            await service.toggle_pin(reply.id)

    @pytest.mark.asyncio
    async def test_trashed_comment_cannot_be_pinned(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        comment = seed_comment(db, post, deleted_at=datetime.now())

        with pytest.raises(InvalidStateError):
            await service.toggle_pin(comment.id)


class TestBatchModeration:
    """Tests for batch_approve and batch_reject."""

    @pytest.mark.asyncio
    async def test_batch_approve_reports_unknown_ids(self, unit_env):
        """Unknown and trashed ids fail without affecting the rest."""
        # Arrange
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        comment_repo = await unit_env.get(CommentRepository)
        post = seed_post(db)
        pending = seed_comment(db, post, status=CommentStatus.PENDING)
        approved = seed_comment(db, post, status=CommentStatus.APPROVED)
        trashed = seed_comment(db, post, deleted_at=datetime.now())
        unknown = CommentId(uuid4())

        # Act
        result = await service.batch_approve(
            [pending.id, approved.id, trashed.id, unknown, pending.id]
        )

        # Assert
        assert result.updated_count == 1
        assert result.unchanged_count == 1
        assert result.failed_ids == [trashed.id, unknown]
        assert (await comment_repo.find_by_id(pending.id)).status == CommentStatus.APPROVED

    @pytest.mark.asyncio
    async def test_batch_reject(self, unit_env):
        db = await unit_env.get(InMemoryDatabase)
        service = await unit_env.get(ModerationService)
        post = seed_post(db)
        comments = [seed_comment(db, post) for _ in range(3)]

        result = await service.batch_reject([c.id for c in comments])

        assert result.updated_count == 3
        assert all(
            db.comments[c.id].status == CommentStatus.PENDING for c in comments
        )

    @pytest.mark.asyncio
    async def test_empty_batch_is_rejected(self, unit_env):
        service = await unit_env.get(ModerationService)

        with pytest.raises(ValidationError):
            await service.batch_approve([])
