"""In-memory report repository for testing."""

from typing import Optional, Sequence

from commentary.domain.model import Report
from commentary.domain.repository import ReportRepository
from commentary.domain.value import CommentId, ReportId, ReportStatus

from .database import InMemoryDatabase


class InMemoryReportRepository(ReportRepository):
    """In-memory implementation of ReportRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.db = database

    async def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Find a report by ID."""
        return self.db.reports.get(report_id)

    async def lock_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Find a report by ID."""
        return self.db.reports.get(report_id)

    async def find_by_status(
        self,
        status: Optional[ReportStatus] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Report]:
        """Find reports, newest first."""
        reports = [
            r for r in self.db.reports.values() if status is None or r.status == status
        ]
        reports.sort(key=lambda r: str(r.id))
        reports.sort(key=lambda r: r.created_at, reverse=True)
        if limit is None:
            return reports[offset:]
        return reports[offset : offset + limit]

    async def count_by_status(self, status: Optional[ReportStatus] = None) -> int:
        """Count reports."""
        return sum(
            1 for r in self.db.reports.values() if status is None or r.status == status
        )

    async def find_by_comment(self, comment_id: CommentId) -> list[Report]:
        """Find all reports against a comment, newest first."""
        reports = [r for r in self.db.reports.values() if r.comment_id == comment_id]
        reports.sort(key=lambda r: r.created_at, reverse=True)
        return reports

    async def save(self, report: Report) -> Report:
        """Save or update a report."""
        self.db.reports[report.id] = report
        return report

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every report against the given comments."""
        doomed = set(comment_ids)
        removed = [rid for rid, r in self.db.reports.items() if r.comment_id in doomed]
        for report_id in removed:
            del self.db.reports[report_id]
        return len(removed)
