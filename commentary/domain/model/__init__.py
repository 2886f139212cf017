"""Domain model entities for the comment engine."""

from commentary.domain.model.comment import Comment
from commentary.domain.model.event import (
    CommentCreated,
    CommentReported,
    CommentStatusChanged,
    DomainEvent,
)
from commentary.domain.model.like import Like, LikeStatus
from commentary.domain.model.page import Page
from commentary.domain.model.post import Post
from commentary.domain.model.report import Report
from commentary.domain.model.stats import CommentStats
from commentary.domain.model.thread import CommentThread, CommentView
from commentary.domain.model.user import User

__all__ = [
    "Comment",
    "CommentCreated",
    "CommentReported",
    "CommentStats",
    "CommentStatusChanged",
    "CommentThread",
    "CommentView",
    "DomainEvent",
    "Like",
    "LikeStatus",
    "Page",
    "Post",
    "Report",
    "User",
]
