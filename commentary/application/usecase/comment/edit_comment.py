"""Edit comment use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.application.usecase.comment.item import CommentItem, to_comment_item
from commentary.domain.service import CommentService
from commentary.domain.value import CommentId, UserId


class EditCommentRequest(BaseModel):
    """Edit comment request."""

    comment_id: str
    user_id: str | None  # Authenticated user
    content: str


class EditCommentResponse(BaseModel):
    """Edit comment response."""

    comment: CommentItem


class EditCommentUseCase:
    """Use case for an author rewriting their own comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: EditCommentRequest) -> EditCommentResponse:
        """Execute edit comment flow.

        Raises:
            UnauthorizedError: If no user is given
            NotAuthorizedError: If the user is not the author
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is trashed
            ValidationError: If the content is invalid
        """
        comment = await self.comment_service.edit_comment(
            comment_id=CommentId(parse_id(request.comment_id, "comment")),
            user_id=UserId(parse_id(request.user_id, "user")) if request.user_id else None,
            content=request.content,
        )
        return EditCommentResponse(comment=to_comment_item(comment))
