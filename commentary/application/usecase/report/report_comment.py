"""Report comment use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.application.usecase.report.item import ReportItem, to_report_item
from commentary.domain.service import ReportService
from commentary.domain.value import CommentId, UserId


class ReportCommentRequest(BaseModel):
    """Report comment request."""

    comment_id: str
    reporter_id: str | None  # Authenticated user
    reason: str  # Validated by the domain
    details: str | None = None


class ReportCommentResponse(BaseModel):
    """Report comment response."""

    report: ReportItem


class ReportCommentUseCase:
    """Use case for flagging a comment for review."""

    def __init__(self, report_service: ReportService) -> None:
        """Initialize report comment use case.

        Args:
            report_service: Report domain service
        """
        self.report_service = report_service

    async def execute(self, request: ReportCommentRequest) -> ReportCommentResponse:
        """Execute report flow.

        Raises:
            UnauthorizedError: If no reporter is given
            NotFoundError: If the comment does not exist
            ValidationError: If the reason or details are invalid
        """
        report = await self.report_service.report_comment(
            comment_id=CommentId(parse_id(request.comment_id, "comment")),
            reporter_id=(
                UserId(parse_id(request.reporter_id, "user"))
                if request.reporter_id
                else None
            ),
            reason=request.reason,
            details=request.details,
        )
        return ReportCommentResponse(report=to_report_item(report))
