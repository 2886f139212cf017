"""Create comment use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.application.usecase.comment.item import CommentItem, to_comment_item
from commentary.domain.service import CommentService
from commentary.domain.value import CommentId, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    content: str
    author_id: str | None = None  # None for anonymous comments
    parent_id: str | None = None  # Comment being replied to
    ip_address: str | None = None
    user_agent: str | None = None


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            ValidationError: If content or ids are invalid
            UnauthorizedError: If anonymous comments are disabled
            NotFoundError: If post, author or parent does not exist
            InvalidStateError: If the parent is trashed
        """
        comment = await self.comment_service.create_comment(
            post_id=PostId(parse_id(request.post_id, "post")),
            author_id=UserId(parse_id(request.author_id, "user")) if request.author_id else None,
            content=request.content,
            parent_id=(
                CommentId(parse_id(request.parent_id, "parent comment"))
                if request.parent_id
                else None
            ),
            ip_address=request.ip_address,
            user_agent=request.user_agent,
        )
        return CreateCommentResponse(comment=to_comment_item(comment))
