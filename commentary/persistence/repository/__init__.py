"""PostgreSQL repository implementations."""

from commentary.persistence.repository.comment import PostgresCommentRepository
from commentary.persistence.repository.like import PostgresLikeRepository
from commentary.persistence.repository.post import PostgresPostRepository
from commentary.persistence.repository.report import PostgresReportRepository
from commentary.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresLikeRepository",
    "PostgresPostRepository",
    "PostgresReportRepository",
    "PostgresUserRepository",
]
