"""Moderation domain service.

Drives comments through the moderation state machine defined in
``commentary.domain.model.moderation``.
"""

from datetime import datetime

import logfire

from commentary.config import CommentSettings
from commentary.domain.error import (
    InvalidOperationError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from commentary.domain.model import Comment, CommentStatusChanged
from commentary.domain.model.common import DomainModel
from commentary.domain.model.moderation import transition
from commentary.domain.repository import (
    CommentCriteria,
    CommentRepository,
    LikeRepository,
    ReportRepository,
)
from commentary.domain.value import CommentId, ModerationAction, ModerationState

from .base import Service
from .event_service import EventService


class BatchModerationResult(DomainModel):
    """Outcome of a batch approve/reject.

    ``updated_count`` counts real state changes only. Ids already in the
    target state are ``unchanged``; unknown or trashed ids are ``failed``.
    Neither is a partial failure of the batch.
    """

    updated_count: int
    unchanged_count: int
    failed_ids: list[CommentId]


class ModerationService(Service):
    """Domain service for moderation transitions."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        report_repository: ReportRepository,
        event_service: EventService,
        settings: CommentSettings,
    ) -> None:
        """Initialize moderation service.

        Args:
            comment_repository: Comment repository
            like_repository: Like ledger repository (purged with comments)
            report_repository: Report repository (purged with comments)
            event_service: Domain event emission
            settings: Comment policy
        """
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.report_repository = report_repository
        self.event_service = event_service
        self.settings = settings

    async def _lock(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.lock_by_id(comment_id)
        if comment is None:
            logfire.warn("Moderation on non-existent comment", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def _apply(
        self,
        comment: Comment,
        action: ModerationAction,
        now: datetime,
    ) -> tuple[Comment, bool]:
        """Apply an action to a locked comment and persist the result."""
        source = comment.state
        updated = comment.apply(action, now)
        if updated is comment:
            logfire.info(
                "Moderation no-op",
                comment_id=str(comment.id),
                action=action.value,
                state=source.value,
            )
            return comment, False

        saved = await self.comment_repository.save(updated)
        logfire.info(
            "Comment moderated",
            comment_id=str(comment.id),
            action=action.value,
            from_state=source.value,
            to_state=saved.state.value,
        )
        await self.event_service.emit(
            CommentStatusChanged(
                comment_id=saved.id,
                action=action,
                from_state=source,
                to_state=saved.state,
            )
        )
        return saved, True

    async def _transition(
        self, comment_id: CommentId, action: ModerationAction
    ) -> tuple[Comment, bool]:
        comment = await self._lock(comment_id)
        return await self._apply(comment, action, datetime.now())

    async def approve(self, comment_id: CommentId) -> Comment:
        """Publish a pending comment. Approving an approved comment is a no-op.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is trashed
        """
        with logfire.span("moderation_service.approve", comment_id=str(comment_id)):
            comment, _ = await self._transition(comment_id, ModerationAction.APPROVE)
            return comment

    async def reject(self, comment_id: CommentId) -> Comment:
        """Send an approved comment back to review. Rejecting a pending comment is a no-op.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is trashed
        """
        with logfire.span("moderation_service.reject", comment_id=str(comment_id)):
            comment, _ = await self._transition(comment_id, ModerationAction.REJECT)
            return comment

    async def soft_delete(self, comment_id: CommentId) -> Comment:
        """Move a comment to the trash.

        Replies are left alone unless ``cascade_trash_to_replies`` is set, in
        which case active replies are trashed with the same timestamp.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is already trashed
        """
        with logfire.span(
            "moderation_service.soft_delete", comment_id=str(comment_id)
        ):
            now = datetime.now()
            comment = await self._lock(comment_id)
            trashed, _ = await self._apply(comment, ModerationAction.SOFT_DELETE, now)

            if self.settings.cascade_trash_to_replies and trashed.is_top_level:
                replies = await self.comment_repository.find(
                    CommentCriteria(root_ids=(trashed.id,), trashed=False)
                )
                for reply in replies:
                    await self._apply(reply, ModerationAction.SOFT_DELETE, now)
                logfire.info(
                    "Trash cascaded to replies",
                    comment_id=str(comment_id),
                    reply_count=len(replies),
                )

            return trashed

    async def restore(self, comment_id: CommentId) -> Comment:
        """Take a comment out of the trash. It always lands back in PENDING.

        With ``cascade_trash_to_replies`` set, replies trashed together with
        this comment are restored too.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is not trashed
        """
        with logfire.span("moderation_service.restore", comment_id=str(comment_id)):
            now = datetime.now()
            comment = await self._lock(comment_id)
            trashed_at = comment.deleted_at
            restored, _ = await self._apply(comment, ModerationAction.RESTORE, now)

            if self.settings.cascade_trash_to_replies and restored.is_top_level:
                replies = await self.comment_repository.find(
                    CommentCriteria(root_ids=(restored.id,), trashed=True)
                )
                cascaded = [r for r in replies if r.deleted_at == trashed_at]
                for reply in cascaded:
                    await self._apply(reply, ModerationAction.RESTORE, now)
                logfire.info(
                    "Restore cascaded to replies",
                    comment_id=str(comment_id),
                    reply_count=len(cascaded),
                )

            return restored

    async def permanent_delete(self, comment_id: CommentId) -> list[CommentId]:
        """Irreversibly remove a trashed comment.

        Purging a top-level comment purges its replies as well, since a reply
        cannot outlive its thread root. Likes and reports of every purged
        comment go with it.

        Returns:
            IDs of every purged comment

        Raises:
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is not trashed
        """
        with logfire.span(
            "moderation_service.permanent_delete", comment_id=str(comment_id)
        ):
            comment = await self._lock(comment_id)
            source = comment.state
            transition(source, ModerationAction.PERMANENT_DELETE)

            purged = [comment.id]
            if comment.is_top_level:
                replies = await self.comment_repository.find(
                    CommentCriteria(root_ids=(comment.id,), trashed=None)
                )
                purged = [reply.id for reply in replies] + purged

            await self.like_repository.delete_by_comments(purged)
            await self.report_repository.delete_by_comments(purged)
            await self.comment_repository.delete_many(purged)

            logfire.info(
                "Comment permanently deleted",
                comment_id=str(comment_id),
                purged_count=len(purged),
            )
            await self.event_service.emit(
                CommentStatusChanged(
                    comment_id=comment.id,
                    action=ModerationAction.PERMANENT_DELETE,
                    from_state=source,
                    to_state=ModerationState.PURGED,
                )
            )
            return purged

    async def toggle_pin(self, comment_id: CommentId) -> Comment:
        """Pin or unpin a top-level comment.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidOperationError: If the comment is a reply
            InvalidStateError: If the comment is trashed
        """
        with logfire.span("moderation_service.toggle_pin", comment_id=str(comment_id)):
            comment = await self._lock(comment_id)
            if not comment.is_top_level:
                raise InvalidOperationError("Only top-level comments can be pinned")
            if comment.is_trashed:
                raise InvalidStateError(f"Cannot pin trashed comment {comment_id}")

            updated = comment.model_copy(
                update={"is_pinned": not comment.is_pinned, "updated_at": datetime.now()}
            )
            saved = await self.comment_repository.save(updated)
            logfire.info(
                "Comment pin toggled",
                comment_id=str(comment_id),
                is_pinned=saved.is_pinned,
            )
            return saved

    async def batch_approve(
        self, comment_ids: list[CommentId]
    ) -> BatchModerationResult:
        """Approve every eligible comment in the list.

        Raises:
            ValidationError: If the list is empty
        """
        with logfire.span("moderation_service.batch_approve", count=len(comment_ids)):
            return await self._batch(comment_ids, ModerationAction.APPROVE)

    async def batch_reject(self, comment_ids: list[CommentId]) -> BatchModerationResult:
        """Reject every eligible comment in the list.

        Raises:
            ValidationError: If the list is empty
        """
        with logfire.span("moderation_service.batch_reject", count=len(comment_ids)):
            return await self._batch(comment_ids, ModerationAction.REJECT)

    async def _batch(
        self, comment_ids: list[CommentId], action: ModerationAction
    ) -> BatchModerationResult:
        if not comment_ids:
            raise ValidationError("At least one comment must be selected")

        updated = 0
        unchanged = 0
        failed: list[CommentId] = []
        # Each id gets its own nested transaction so one failure keeps
        # earlier transitions intact
        for comment_id in dict.fromkeys(comment_ids):
            try:
                async with self.comment_repository.transaction():
                    _, changed = await self._transition(comment_id, action)
            except (NotFoundError, InvalidStateError) as e:
                logfire.warn(
                    "Batch item skipped",
                    comment_id=str(comment_id),
                    action=action.value,
                    reason=str(e),
                )
                failed.append(comment_id)
                continue

            if changed:
                updated += 1
            else:
                unchanged += 1

        logfire.info(
            "Batch moderation finished",
            action=action.value,
            updated_count=updated,
            unchanged_count=unchanged,
            failed_count=len(failed),
        )
        return BatchModerationResult(
            updated_count=updated, unchanged_count=unchanged, failed_ids=failed
        )
