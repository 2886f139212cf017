"""Report response item."""

from datetime import datetime

from pydantic import BaseModel

from commentary.domain.model import Report
from commentary.domain.value import ReportReason, ReportStatus


class ReportItem(BaseModel):
    """Report as returned to clients."""

    report_id: str
    comment_id: str
    reporter_id: str
    reason: ReportReason
    details: str | None
    status: ReportStatus
    created_at: datetime
    resolved_at: datetime | None


def to_report_item(report: Report) -> ReportItem:
    """Build a response item from a report."""
    return ReportItem(
        report_id=str(report.id),
        comment_id=str(report.comment_id),
        reporter_id=str(report.reporter_id),
        reason=report.reason,
        details=report.details,
        status=report.status,
        created_at=report.created_at,
        resolved_at=report.resolved_at,
    )
