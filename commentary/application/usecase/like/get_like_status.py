"""Get like status use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.domain.service import LikeService
from commentary.domain.value import CommentId, UserId


class GetLikeStatusRequest(BaseModel):
    """Get like status request."""

    comment_id: str
    user_id: str | None = None  # Anonymous viewers never like anything


class GetLikeStatusResponse(BaseModel):
    """Viewer's like state on a comment."""

    comment_id: str
    liked: bool
    likes_count: int


class GetLikeStatusUseCase:
    """Use case for reading a viewer's like state."""

    def __init__(self, like_service: LikeService) -> None:
        self.like_service = like_service

    async def execute(self, request: GetLikeStatusRequest) -> GetLikeStatusResponse:
        """Execute get like status flow.

        Raises:
            NotFoundError: If the comment does not exist
        """
        status = await self.like_service.get_like_status(
            comment_id=CommentId(parse_id(request.comment_id, "comment")),
            user_id=UserId(parse_id(request.user_id, "user")) if request.user_id else None,
        )
        return GetLikeStatusResponse(
            comment_id=request.comment_id,
            liked=status.liked,
            likes_count=status.likes_count,
        )
