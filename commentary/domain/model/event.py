"""Domain events.

Events are emitted after the mutation they describe and relayed to admin
clients by the notification layer. Delivery is at-most-once.
"""

from datetime import datetime
from typing import ClassVar

from pydantic import Field

from commentary.domain.model.comment import Comment
from commentary.domain.model.common import DomainModel
from commentary.domain.model.report import Report
from commentary.domain.value import CommentId, ModerationAction, ModerationState


class DomainEvent(DomainModel):
    """Base class for domain events."""

    name: ClassVar[str] = "event"

    occurred_at: datetime = Field(default_factory=datetime.now)

    def to_message(self) -> dict:
        """Serialize the event for the notification channel."""
        return {
            "event": self.name,
            "data": self.model_dump(mode="json", exclude={"occurred_at"}),
            "timestamp": self.occurred_at.isoformat(),
        }


class CommentCreated(DomainEvent):
    """A comment entered the review queue or was published."""

    name: ClassVar[str] = "comment.created"

    comment: Comment


class CommentReported(DomainEvent):
    """A user flagged a comment."""

    name: ClassVar[str] = "comment.reported"

    report: Report


class CommentStatusChanged(DomainEvent):
    """A moderation transition changed a comment's state."""

    name: ClassVar[str] = "comment.status_changed"

    comment_id: CommentId
    action: ModerationAction
    from_state: ModerationState
    to_state: ModerationState
