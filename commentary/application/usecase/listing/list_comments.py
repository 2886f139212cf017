"""List comments use case (admin moderation queue)."""

from pydantic import BaseModel

from commentary.application.usecase.base import PageResponse, page_fields, parse_id
from commentary.application.usecase.comment.item import CommentItem, to_comment_item
from commentary.domain.service import ListingService
from commentary.domain.value import CommentStatus, PostId


class ListCommentsRequest(BaseModel):
    """List comments request."""

    status: CommentStatus | None = None
    post_id: str | None = None
    search: str | None = None  # Matches content or author username
    page: int = 1
    limit: int | None = None


class ListCommentsUseCase:
    """Use case for listing active comments for moderation."""

    def __init__(self, listing_service: ListingService) -> None:
        """Initialize list comments use case.

        Args:
            listing_service: Listing domain service
        """
        self.listing_service = listing_service

    async def execute(self, request: ListCommentsRequest) -> PageResponse[CommentItem]:
        """Execute list comments flow.

        Trashed comments never appear here; see ListTrashUseCase.

        Raises:
            ValidationError: If paging or ids are invalid
        """
        page = await self.listing_service.list_comments(
            status=request.status,
            post_id=PostId(parse_id(request.post_id, "post")) if request.post_id else None,
            search=request.search,
            page=request.page,
            limit=request.limit,
        )
        return PageResponse[CommentItem](
            items=[to_comment_item(c, include_private=True) for c in page.items],
            **page_fields(page),
        )
