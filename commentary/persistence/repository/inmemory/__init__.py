"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .database import InMemoryDatabase
from .like import InMemoryLikeRepository
from .post import InMemoryPostRepository
from .report import InMemoryReportRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryDatabase",
    "InMemoryLikeRepository",
    "InMemoryPostRepository",
    "InMemoryReportRepository",
    "InMemoryUserRepository",
]
