"""List trash use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import PageResponse, page_fields
from commentary.application.usecase.comment.item import CommentItem, to_comment_item
from commentary.domain.service import ListingService


class ListTrashRequest(BaseModel):
    """List trash request."""

    page: int = 1
    limit: int | None = None


class ListTrashUseCase:
    """Use case for listing trashed comments, most recently trashed first."""

    def __init__(self, listing_service: ListingService) -> None:
        self.listing_service = listing_service

    async def execute(self, request: ListTrashRequest) -> PageResponse[CommentItem]:
        """Execute list trash flow."""
        page = await self.listing_service.list_trash(
            page=request.page, limit=request.limit
        )
        return PageResponse[CommentItem](
            items=[to_comment_item(c, include_private=True) for c in page.items],
            **page_fields(page),
        )
