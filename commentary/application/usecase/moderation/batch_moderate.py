"""Batch moderation use case."""

from typing import Literal

from pydantic import BaseModel

from commentary.application.usecase.base import parse_id
from commentary.domain.service import ModerationService
from commentary.domain.value import CommentId


class BatchModerateRequest(BaseModel):
    """Batch moderation request."""

    comment_ids: list[str]
    action: Literal["approve", "reject"]


class BatchModerateResponse(BaseModel):
    """Batch moderation outcome."""

    updated_count: int
    unchanged_count: int
    failed_ids: list[str]


class BatchModerateUseCase:
    """Use case for approving or rejecting many comments at once."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize batch moderation use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: BatchModerateRequest) -> BatchModerateResponse:
        """Execute batch moderation flow.

        Each id is handled on its own: unknown or trashed ids are reported in
        ``failed_ids`` without affecting the others.

        Raises:
            ValidationError: If no ids are given or an id is malformed
        """
        comment_ids = [
            CommentId(parse_id(comment_id, "comment"))
            for comment_id in request.comment_ids
        ]
        if request.action == "approve":
            result = await self.moderation_service.batch_approve(comment_ids)
        else:
            result = await self.moderation_service.batch_reject(comment_ids)

        return BatchModerateResponse(
            updated_count=result.updated_count,
            unchanged_count=result.unchanged_count,
            failed_ids=[str(comment_id) for comment_id in result.failed_ids],
        )
