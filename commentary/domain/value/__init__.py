"""Domain value objects for the comment engine."""

from commentary.domain.value.identifiers import (
    CommentId,
    LikeId,
    PostId,
    ReportId,
    UserId,
)
from commentary.domain.value.types import (
    ANONYMOUS_USERNAME,
    CommentSortOrder,
    CommentStatus,
    ModerationAction,
    ModerationState,
    ReportAction,
    ReportReason,
    ReportStatus,
    Username,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "LikeId",
    "ReportId",
    # Types
    "ANONYMOUS_USERNAME",
    "CommentSortOrder",
    "CommentStatus",
    "ModerationAction",
    "ModerationState",
    "ReportAction",
    "ReportReason",
    "ReportStatus",
    "Username",
]
