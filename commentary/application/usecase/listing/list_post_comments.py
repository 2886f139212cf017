"""List post comments use case (public)."""

from pydantic import BaseModel

from commentary.application.usecase.base import PageResponse, page_fields, parse_id
from commentary.application.usecase.comment.item import ThreadItem, to_thread_item
from commentary.domain.service import ListingService
from commentary.domain.value import CommentSortOrder, PostId, UserId


class ListPostCommentsRequest(BaseModel):
    """List post comments request."""

    post_id: str
    page: int = 1
    limit: int | None = None
    sort: CommentSortOrder = CommentSortOrder.NEWEST
    viewer_id: str | None = None  # Authenticated viewer, for is_liked


class ListPostCommentsUseCase:
    """Use case for the threads shown under a post."""

    def __init__(self, listing_service: ListingService) -> None:
        """Initialize list post comments use case.

        Args:
            listing_service: Listing domain service
        """
        self.listing_service = listing_service

    async def execute(self, request: ListPostCommentsRequest) -> PageResponse[ThreadItem]:
        """Execute list post comments flow.

        Only approved, non-trashed comments are returned. Pinned threads
        come first.

        Raises:
            NotFoundError: If the post does not exist
            ValidationError: If paging or ids are invalid
        """
        page = await self.listing_service.list_post_comments(
            post_id=PostId(parse_id(request.post_id, "post")),
            page=request.page,
            limit=request.limit,
            sort=request.sort,
            viewer_id=(
                UserId(parse_id(request.viewer_id, "user")) if request.viewer_id else None
            ),
        )
        return PageResponse[ThreadItem](
            items=[to_thread_item(thread) for thread in page.items],
            **page_fields(page),
        )
