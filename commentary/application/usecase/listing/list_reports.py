"""List reports use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import PageResponse, page_fields
from commentary.application.usecase.report.item import ReportItem, to_report_item
from commentary.domain.service import ListingService
from commentary.domain.value import ReportStatus


class ListReportsRequest(BaseModel):
    """List reports request."""

    status: ReportStatus | None = ReportStatus.PENDING  # None lists all
    page: int = 1
    limit: int | None = None


class ListReportsUseCase:
    """Use case for the report review queue."""

    def __init__(self, listing_service: ListingService) -> None:
        self.listing_service = listing_service

    async def execute(self, request: ListReportsRequest) -> PageResponse[ReportItem]:
        """Execute list reports flow."""
        page = await self.listing_service.list_reports(
            status=request.status, page=request.page, limit=request.limit
        )
        return PageResponse[ReportItem](
            items=[to_report_item(r) for r in page.items],
            **page_fields(page),
        )
