"""PostgreSQL implementation of Report repository."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import Report
from commentary.domain.repository import ReportRepository
from commentary.domain.value import CommentId, ReportId, ReportStatus
from commentary.persistence.mappers import report_to_dict, row_to_report
from commentary.persistence.tables import comment_reports_table


class PostgresReportRepository(ReportRepository):
    """PostgreSQL implementation of ReportRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Find a report by ID."""
        stmt = select(comment_reports_table).where(
            comment_reports_table.c.id == report_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_report(row._asdict()) if row else None

    async def lock_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Find a report with SELECT ... FOR UPDATE."""
        stmt = (
            select(comment_reports_table)
            .where(comment_reports_table.c.id == report_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_report(row._asdict()) if row else None

    async def find_by_status(
        self,
        status: Optional[ReportStatus] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Report]:
        """Find reports, newest first."""
        stmt = select(comment_reports_table)
        if status is not None:
            stmt = stmt.where(comment_reports_table.c.status == status.value)
        stmt = stmt.order_by(
            desc(comment_reports_table.c.created_at), comment_reports_table.c.id
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)

        result = await self.session.execute(stmt)
        return [row_to_report(row._asdict()) for row in result.fetchall()]

    async def count_by_status(self, status: Optional[ReportStatus] = None) -> int:
        """Count reports."""
        stmt = select(func.count()).select_from(comment_reports_table)
        if status is not None:
            stmt = stmt.where(comment_reports_table.c.status == status.value)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_comment(self, comment_id: CommentId) -> List[Report]:
        """Find all reports against a comment, newest first."""
        stmt = (
            select(comment_reports_table)
            .where(comment_reports_table.c.comment_id == comment_id)
            .order_by(desc(comment_reports_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_report(row._asdict()) for row in result.fetchall()]

    async def save(self, report: Report) -> Report:
        """Save a report (create or update)."""
        existing = await self.find_by_id(report.id)
        report_dict = report_to_dict(report)

        if existing:
            stmt = (
                update(comment_reports_table)
                .where(comment_reports_table.c.id == report.id)
                .values(**report_dict)
            )
        else:
            stmt = comment_reports_table.insert().values(**report_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return report

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every report against the given comments."""
        if not comment_ids:
            return 0
        stmt = delete(comment_reports_table).where(
            comment_reports_table.c.comment_id.in_(comment_ids)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
