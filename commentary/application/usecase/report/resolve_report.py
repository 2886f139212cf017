"""Resolve report use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.application.usecase.report.item import ReportItem, to_report_item
from commentary.domain.service import ReportService
from commentary.domain.value import ReportAction, ReportId


class ResolveReportRequest(BaseModel):
    """Resolve report request."""

    report_id: str
    action: ReportAction
    delete_comment: bool = False


class ResolveReportResponse(BaseModel):
    """Resolve report response."""

    report: ReportItem


class ResolveReportUseCase:
    """Use case for deciding a pending report."""

    def __init__(self, report_service: ReportService) -> None:
        self.report_service = report_service

    async def execute(self, request: ResolveReportRequest) -> ResolveReportResponse:
        """Execute resolve flow.

        Raises:
            NotFoundError: If the report does not exist
            InvalidStateError: If the report was already decided
        """
        report = await self.report_service.resolve_report(
            report_id=ReportId(parse_id(request.report_id, "report")),
            action=request.action,
            delete_comment=request.delete_comment,
        )
        return ResolveReportResponse(report=to_report_item(report))
