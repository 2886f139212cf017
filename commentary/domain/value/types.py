"""Domain value objects for the comment engine."""

from enum import Enum

from pydantic import field_validator

from commentary.domain.value.common import RootValueObject


class CommentStatus(str, Enum):
    """Moderation visibility of a comment."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"


class ModerationState(str, Enum):
    """Lifecycle state of a comment.

    TRASHED is derived from ``deleted_at``; PURGED means the row is gone.
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    TRASHED = "TRASHED"
    PURGED = "PURGED"


class ModerationAction(str, Enum):
    """Transitions the moderation state machine accepts."""

    APPROVE = "approve"
    REJECT = "reject"
    SOFT_DELETE = "soft_delete"
    RESTORE = "restore"
    PERMANENT_DELETE = "permanent_delete"


class ReportReason(str, Enum):
    """Why a comment was reported."""

    SPAM = "spam"
    ABUSE = "abuse"
    HARASSMENT = "harassment"
    OTHER = "other"


class ReportStatus(str, Enum):
    """Status of a report."""

    PENDING = "pending"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ReportAction(str, Enum):
    """Admin decision on a pending report."""

    RESOLVE = "resolve"
    DISMISS = "dismiss"


class CommentSortOrder(str, Enum):
    """Ordering of top-level comments on a post page."""

    NEWEST = "newest"
    OLDEST = "oldest"
    POPULAR = "popular"


class Username(RootValueObject[str]):
    """Display name of a comment author."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Username must be 1-255 characters")
        return v


ANONYMOUS_USERNAME = Username("anonymous")
