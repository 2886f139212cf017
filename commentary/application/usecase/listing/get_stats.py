"""Get stats use case."""

from pydantic import BaseModel

from commentary.domain.service import ListingService


class GetStatsResponse(BaseModel):
    """Moderation dashboard counters."""

    total: int
    pending: int
    approved: int
    trashed: int
    pending_reports: int


class GetStatsUseCase:
    """Use case for the moderation dashboard counters."""

    def __init__(self, listing_service: ListingService) -> None:
        self.listing_service = listing_service

    async def execute(self) -> GetStatsResponse:
        """Execute get stats flow."""
        stats = await self.listing_service.get_stats()
        return GetStatsResponse(**stats.model_dump())
