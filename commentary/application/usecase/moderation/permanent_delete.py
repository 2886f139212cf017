"""Permanent delete use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.domain.service import ModerationService
from commentary.domain.value import CommentId


class PermanentDeleteRequest(BaseModel):
    """Permanent delete request."""

    comment_id: str


class PermanentDeleteResponse(BaseModel):
    """Permanent delete response."""

    comment_id: str
    purged_ids: list[str]  # The comment and, for a thread root, its replies


class PermanentDeleteUseCase:
    """Use case for purging a trashed comment."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self, request: PermanentDeleteRequest) -> PermanentDeleteResponse:
        """Execute permanent delete flow.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is not in the trash
        """
        purged = await self.moderation_service.permanent_delete(
            CommentId(parse_id(request.comment_id, "comment"))
        )
        return PermanentDeleteResponse(
            comment_id=request.comment_id,
            purged_ids=[str(comment_id) for comment_id in purged],
        )
