"""Moderate comment use case."""

from typing import Literal

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.application.usecase.comment.item import CommentItem, to_comment_item
from commentary.domain.service import ModerationService
from commentary.domain.value import CommentId

# Single-comment transitions that leave the comment in place
ModerateAction = Literal["approve", "reject", "soft_delete", "restore"]


class ModerateCommentRequest(BaseModel):
    """Moderate comment request."""

    comment_id: str
    action: ModerateAction


class ModerateCommentResponse(BaseModel):
    """Comment after the transition."""

    comment: CommentItem


class ModerateCommentUseCase:
    """Use case for approving, rejecting, trashing or restoring a comment."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize moderate comment use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: ModerateCommentRequest) -> ModerateCommentResponse:
        """Execute moderation flow.

        Approve and reject are idempotent; repeating them returns the
        comment unchanged.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidStateError: If the action is illegal from the current state
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        handlers = {
            "approve": self.moderation_service.approve,
            "reject": self.moderation_service.reject,
            "soft_delete": self.moderation_service.soft_delete,
            "restore": self.moderation_service.restore,
        }
        comment = await handlers[request.action](comment_id)
        return ModerateCommentResponse(
            comment=to_comment_item(comment, include_private=True)
        )
