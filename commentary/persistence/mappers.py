"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from commentary.domain.model import Comment, Like, Post, Report, User
from commentary.domain.value import (
    CommentId,
    CommentStatus,
    LikeId,
    PostId,
    ReportId,
    ReportReason,
    ReportStatus,
    UserId,
    Username,
)


def _uuid(value: Any) -> Optional[UUID]:
    """Coerce a driver value to UUID (asyncpg returns UUID, others str)."""
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        avatar_url=row.get("avatar_url"),
    )


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        slug=row["slug"],
        deleted_at=row.get("deleted_at"),
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    author_id = _uuid(row.get("author_id"))
    root_id = _uuid(row.get("root_id"))
    reply_to_id = _uuid(row.get("reply_to_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(author_id) if author_id else None,
        author_username=Username(row["author_username"]),
        content=row["content"],
        root_id=CommentId(root_id) if root_id else None,
        reply_to_id=CommentId(reply_to_id) if reply_to_id else None,
        reply_to_username=(
            Username(row["reply_to_username"])
            if row.get("reply_to_username")
            else None
        ),
        status=CommentStatus(row["status"]),
        is_pinned=row["is_pinned"],
        is_edited=row["is_edited"],
        likes_count=row["likes_count"],
        ip_address=row.get("ip_address"),
        user_agent=row.get("user_agent"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump()
    data["status"] = comment.status.value
    return data


def row_to_like(row: Dict[str, Any]) -> Like:
    """Convert database row to Like domain model."""
    return Like(
        id=LikeId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
    )


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to database dict."""
    return like.model_dump()


def row_to_report(row: Dict[str, Any]) -> Report:
    """Convert database row to Report domain model.

    Args:
        row: Database row as dict

    Returns:
        Report domain model
    """
    return Report(
        id=ReportId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        reporter_id=UserId(_uuid(row["reporter_id"])),
        reason=ReportReason(row["reason"]),
        details=row.get("details"),
        status=ReportStatus(row["status"]),
        created_at=row["created_at"],
        resolved_at=row.get("resolved_at"),
    )


def report_to_dict(report: Report) -> Dict[str, Any]:
    """Convert Report domain model to database dict."""
    data = report.model_dump()
    data["reason"] = report.reason.value
    data["status"] = report.status.value
    return data
