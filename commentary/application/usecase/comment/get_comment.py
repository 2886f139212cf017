"""Get comment use case (admin detail)."""

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.application.usecase.comment.item import CommentItem, to_comment_item
from commentary.domain.service import CommentService
from commentary.domain.value import CommentId


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str


class GetCommentResponse(BaseModel):
    """Get comment response, trashed comments included."""

    comment: CommentItem


class GetCommentUseCase:
    """Use case for the admin comment detail view."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        """Execute get comment flow.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_service.get_comment(
            CommentId(parse_id(request.comment_id, "comment"))
        )
        return GetCommentResponse(
            comment=to_comment_item(comment, include_private=True)
        )
