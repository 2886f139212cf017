"""Comment entity.

Threading is flattened to two tiers: a comment is either top-level
(``root_id`` is None) or a reply whose ``root_id`` points at a top-level
comment. Replies to replies keep the shared root and remember who they
answered through ``reply_to_id``/``reply_to_username``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from commentary.domain.model.common import DomainModel
from commentary.domain.model.moderation import transition
from commentary.domain.value import (
    CommentId,
    CommentStatus,
    ModerationAction,
    ModerationState,
    PostId,
    UserId,
    Username,
)


class Comment(DomainModel):
    """Comment entity."""

    id: CommentId
    post_id: PostId
    author_id: Optional[UserId] = None
    author_username: Username
    content: str = Field(min_length=1)
    root_id: Optional[CommentId] = None
    reply_to_id: Optional[CommentId] = None
    reply_to_username: Optional[Username] = None
    status: CommentStatus = CommentStatus.PENDING
    is_pinned: bool = False
    is_edited: bool = False
    likes_count: int = Field(default=0, ge=0)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_threading(self) -> "Comment":
        """Reply metadata only exists on replies; only top-level comments pin."""
        if self.root_id is None:
            if self.reply_to_id is not None or self.reply_to_username is not None:
                raise ValueError("Top-level comments cannot reply to another comment")
        else:
            if self.is_pinned:
                raise ValueError("Replies cannot be pinned")
            if self.root_id == self.id:
                raise ValueError("A comment cannot be its own root")
        return self

    @property
    def is_top_level(self) -> bool:
        """Whether this comment starts a thread."""
        return self.root_id is None

    @property
    def is_trashed(self) -> bool:
        """Whether this comment is in the trash."""
        return self.deleted_at is not None

    @property
    def state(self) -> ModerationState:
        """Current lifecycle state."""
        if self.deleted_at is not None:
            return ModerationState.TRASHED
        return ModerationState(self.status.value)

    def apply(self, action: ModerationAction, now: datetime) -> "Comment":
        """Apply a moderation action and return the resulting comment.

        Idempotent no-ops return ``self`` unchanged. Permanent deletion has
        no resulting row, so it only validates and returns ``self``.

        Raises:
            InvalidStateError: If the action is not legal from the current state
        """
        result = transition(self.state, action)
        if not result.changed or result.target == ModerationState.PURGED:
            return self

        if result.target == ModerationState.TRASHED:
            return self.model_copy(update={"deleted_at": now, "updated_at": now})

        return self.model_copy(
            update={
                "status": CommentStatus(result.target.value),
                "deleted_at": None,
                "updated_at": now,
            }
        )
