"""Report repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from commentary.domain.model.report import Report
from commentary.domain.value import CommentId, ReportId, ReportStatus


class ReportRepository(ABC):
    """Repository for Report entity."""

    @abstractmethod
    async def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Find a report by ID.

        Args:
            report_id: The report's unique identifier

        Returns:
            The report if found, None otherwise
        """
        pass

    @abstractmethod
    async def lock_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Find a report and lock its row until the transaction ends.

        Args:
            report_id: The report's unique identifier

        Returns:
            The report if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_status(
        self,
        status: Optional[ReportStatus] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Report]:
        """Find reports, newest first.

        Args:
            status: Only reports with this status (None for all)
            limit: Maximum number of reports to return (None for all)
            offset: Number of reports to skip

        Returns:
            List of reports
        """
        pass

    @abstractmethod
    async def count_by_status(self, status: Optional[ReportStatus] = None) -> int:
        """Count reports.

        Args:
            status: Only reports with this status (None for all)

        Returns:
            Number of reports
        """
        pass

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> list[Report]:
        """Find all reports against a comment, newest first.

        Args:
            comment_id: Comment ID

        Returns:
            List of reports
        """
        pass

    @abstractmethod
    async def save(self, report: Report) -> Report:
        """Save a report (create or update).

        Args:
            report: The report to save

        Returns:
            The saved report
        """
        pass

    @abstractmethod
    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every report against the given comments.

        Args:
            comment_ids: Comment IDs

        Returns:
            Number of reports deleted
        """
        pass
