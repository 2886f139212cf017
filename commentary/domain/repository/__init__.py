"""Repository interfaces for the comment engine.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from commentary.domain.repository.comment import (
    CommentCriteria,
    CommentOrder,
    CommentRepository,
)
from commentary.domain.repository.like import LikeRepository
from commentary.domain.repository.post import PostRepository
from commentary.domain.repository.report import ReportRepository
from commentary.domain.repository.user import UserRepository

__all__ = [
    "CommentCriteria",
    "CommentOrder",
    "CommentRepository",
    "LikeRepository",
    "PostRepository",
    "ReportRepository",
    "UserRepository",
]
