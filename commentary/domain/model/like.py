"""Like entity.

A like is a ledger row: its existence means the user likes the comment.
One row per (comment, user), enforced by a unique constraint.
"""

from datetime import datetime

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, LikeId, UserId


class Like(DomainModel):
    """Like ledger entry."""

    id: LikeId
    comment_id: CommentId
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)


class LikeStatus(DomainModel):
    """A user's like state on a comment with the authoritative count."""

    liked: bool
    likes_count: int = Field(ge=0)
