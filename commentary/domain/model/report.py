"""Report entity.

Reports reference comments but never own them: a comment stays
independently moderatable whatever its reports say.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from commentary.domain.error import InvalidStateError
from commentary.domain.model.common import DomainModel
from commentary.domain.value import (
    CommentId,
    ReportAction,
    ReportId,
    ReportReason,
    ReportStatus,
    UserId,
)


class Report(DomainModel):
    """User-submitted flag against a comment."""

    id: ReportId
    comment_id: CommentId
    reporter_id: UserId
    reason: ReportReason
    details: Optional[str] = None
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.now)
    resolved_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        """Whether the report still awaits a decision."""
        return self.status == ReportStatus.PENDING

    def decide(self, action: ReportAction, now: datetime) -> "Report":
        """Resolve or dismiss the report.

        Raises:
            InvalidStateError: If the report was already decided
        """
        if not self.is_pending:
            raise InvalidStateError(
                f"Report {self.id} is already {self.status.value}"
            )
        status = (
            ReportStatus.RESOLVED
            if action == ReportAction.RESOLVE
            else ReportStatus.DISMISSED
        )
        return self.model_copy(update={"status": status, "resolved_at": now})
