"""Toggle pin use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.application.usecase.comment.item import CommentItem, to_comment_item
from commentary.domain.service import ModerationService
from commentary.domain.value import CommentId


class TogglePinRequest(BaseModel):
    """Toggle pin request."""

    comment_id: str


class TogglePinResponse(BaseModel):
    """Toggle pin response."""

    comment: CommentItem


class TogglePinUseCase:
    """Use case for pinning or unpinning a top-level comment."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self, request: TogglePinRequest) -> TogglePinResponse:
        """Execute toggle pin flow.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidOperationError: If the comment is a reply
            InvalidStateError: If the comment is trashed
        """
        comment = await self.moderation_service.toggle_pin(
            CommentId(parse_id(request.comment_id, "comment"))
        )
        return TogglePinResponse(comment=to_comment_item(comment, include_private=True))
