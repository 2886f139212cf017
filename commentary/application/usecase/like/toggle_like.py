"""Toggle like use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.domain.service import LikeService
from commentary.domain.value import CommentId, UserId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    comment_id: str
    user_id: str | None  # Authenticated user


class ToggleLikeResponse(BaseModel):
    """Like state after the toggle."""

    comment_id: str
    liked: bool
    likes_count: int


class ToggleLikeUseCase:
    """Use case for liking or unliking a comment."""

    def __init__(self, like_service: LikeService) -> None:
        """Initialize toggle like use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Raises:
            UnauthorizedError: If no user is given
            NotFoundError: If the comment does not exist
        """
        status = await self.like_service.toggle_like(
            comment_id=CommentId(parse_id(request.comment_id, "comment")),
            user_id=UserId(parse_id(request.user_id, "user")) if request.user_id else None,
        )
        return ToggleLikeResponse(
            comment_id=request.comment_id,
            liked=status.liked,
            likes_count=status.likes_count,
        )
