"""Report workflow domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from commentary.config import CommentSettings
from commentary.domain.error import NotFoundError, UnauthorizedError, ValidationError
from commentary.domain.model import CommentReported, Report
from commentary.domain.repository import CommentRepository, ReportRepository
from commentary.domain.value import (
    CommentId,
    ReportAction,
    ReportId,
    ReportReason,
    ReportStatus,
    UserId,
)

from .base import Service
from .event_service import EventService
from .moderation_service import ModerationService


class ReportService(Service):
    """Domain service for abuse reports.

    A report never changes its comment by itself. Only ``resolve_report``
    with ``delete_comment`` touches the comment, and it does so through the
    moderation state machine.
    """

    def __init__(
        self,
        report_repository: ReportRepository,
        comment_repository: CommentRepository,
        moderation_service: ModerationService,
        event_service: EventService,
        settings: CommentSettings,
    ) -> None:
        """Initialize report service.

        Args:
            report_repository: Report repository
            comment_repository: Comment repository
            moderation_service: Used to trash reported comments
            event_service: Domain event emission
            settings: Comment policy
        """
        self.report_repository = report_repository
        self.comment_repository = comment_repository
        self.moderation_service = moderation_service
        self.event_service = event_service
        self.settings = settings

    async def report_comment(
        self,
        comment_id: CommentId,
        reporter_id: UserId | None,
        reason: ReportReason | str,
        details: str | None = None,
    ) -> Report:
        """File a report against a comment.

        The same user may report the same comment more than once.

        Args:
            comment_id: Reported comment ID
            reporter_id: Reporting user ID
            reason: One of the ``ReportReason`` values
            details: Free-text explanation

        Returns:
            Created report, pending review

        Raises:
            UnauthorizedError: If no reporter is given
            NotFoundError: If the comment does not exist
            ValidationError: If the reason is unknown or details are too long
        """
        with logfire.span(
            "report_service.report_comment",
            comment_id=str(comment_id),
            reporter_id=str(reporter_id) if reporter_id else None,
        ):
            if reporter_id is None:
                raise UnauthorizedError("report comments")

            try:
                reason = ReportReason(reason)
            except ValueError:
                raise ValidationError(f"Invalid report reason: {reason}")

            if details is not None:
                details = details.strip() or None
            if details and len(details) > self.settings.max_report_details_length:
                raise ValidationError(
                    "Report details cannot exceed "
                    f"{self.settings.max_report_details_length} characters"
                )

            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn(
                    "Report on non-existent comment", comment_id=str(comment_id)
                )
                raise NotFoundError("Comment", str(comment_id))

            report = await self.report_repository.save(
                Report(
                    id=ReportId(uuid4()),
                    comment_id=comment_id,
                    reporter_id=reporter_id,
                    reason=reason,
                    details=details,
                    status=ReportStatus.PENDING,
                    created_at=datetime.now(),
                )
            )
            logfire.info(
                "Comment reported",
                report_id=str(report.id),
                comment_id=str(comment_id),
                reason=reason.value,
            )

            await self.event_service.emit(CommentReported(report=report))
            return report

    async def resolve_report(
        self,
        report_id: ReportId,
        action: ReportAction,
        delete_comment: bool = False,
    ) -> Report:
        """Resolve or dismiss a pending report.

        Args:
            report_id: Report ID
            action: ``resolve`` or ``dismiss``
            delete_comment: Also move the reported comment to the trash

        Returns:
            Updated report

        Raises:
            NotFoundError: If the report does not exist
            InvalidStateError: If the report was already decided
        """
        with logfire.span(
            "report_service.resolve_report",
            report_id=str(report_id),
            action=action.value,
            delete_comment=delete_comment,
        ):
            report = await self.report_repository.lock_by_id(report_id)
            if report is None:
                raise NotFoundError("Report", str(report_id))

            decided = report.decide(action, datetime.now())

            if delete_comment:
                comment = await self.comment_repository.find_by_id(report.comment_id)
                if comment is not None and not comment.is_trashed:
                    await self.moderation_service.soft_delete(comment.id)

            saved = await self.report_repository.save(decided)
            logfire.info(
                "Report decided",
                report_id=str(report_id),
                comment_id=str(report.comment_id),
                status=saved.status.value,
                comment_deleted=delete_comment,
            )
            return saved

    async def get_report(self, report_id: ReportId) -> Report:
        """Get a report by ID.

        Raises:
            NotFoundError: If the report does not exist
        """
        report = await self.report_repository.find_by_id(report_id)
        if report is None:
            raise NotFoundError("Report", str(report_id))
        return report
