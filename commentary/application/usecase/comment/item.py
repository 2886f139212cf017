"""Comment response items shared by comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from commentary.domain.model import Comment, CommentThread, CommentView
from commentary.domain.value import CommentStatus


class CommentItem(BaseModel):
    """Comment as returned to admins and authors."""

    comment_id: str
    post_id: str
    author_id: str | None
    author_username: str
    content: str
    root_id: str | None
    reply_to_id: str | None
    reply_to_username: str | None
    status: CommentStatus
    is_pinned: bool
    is_edited: bool
    is_trashed: bool
    likes_count: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None
    # Submitter metadata, admin views only
    ip_address: str | None = None
    user_agent: str | None = None


class PublicCommentItem(BaseModel):
    """Comment as shown on a post page."""

    comment_id: str
    author_id: str | None
    author_username: str
    content: str
    root_id: str | None
    reply_to_id: str | None
    reply_to_username: str | None
    is_pinned: bool
    is_edited: bool
    likes_count: int
    is_liked: bool
    created_at: datetime


class ThreadItem(PublicCommentItem):
    """Top-level comment with its replies."""

    replies: list[PublicCommentItem]


def _opt(value: object) -> str | None:
    return str(value) if value is not None else None


def to_comment_item(comment: Comment, include_private: bool = False) -> CommentItem:
    """Build a response item from a comment.

    Args:
        comment: Comment
        include_private: Include IP address and user agent
    """
    return CommentItem(
        comment_id=str(comment.id),
        post_id=str(comment.post_id),
        author_id=_opt(comment.author_id),
        author_username=str(comment.author_username),
        content=comment.content,
        root_id=_opt(comment.root_id),
        reply_to_id=_opt(comment.reply_to_id),
        reply_to_username=_opt(comment.reply_to_username),
        status=comment.status,
        is_pinned=comment.is_pinned,
        is_edited=comment.is_edited,
        is_trashed=comment.is_trashed,
        likes_count=comment.likes_count,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        deleted_at=comment.deleted_at,
        ip_address=comment.ip_address if include_private else None,
        user_agent=comment.user_agent if include_private else None,
    )


def to_public_item(view: CommentView) -> PublicCommentItem:
    """Build a public item from a viewer-annotated comment."""
    comment = view.comment
    return PublicCommentItem(
        comment_id=str(comment.id),
        author_id=_opt(comment.author_id),
        author_username=str(comment.author_username),
        content=comment.content,
        root_id=_opt(comment.root_id),
        reply_to_id=_opt(comment.reply_to_id),
        reply_to_username=_opt(comment.reply_to_username),
        is_pinned=comment.is_pinned,
        is_edited=comment.is_edited,
        likes_count=comment.likes_count,
        is_liked=view.is_liked,
        created_at=comment.created_at,
    )


def to_thread_item(thread: CommentThread) -> ThreadItem:
    """Build a public thread item."""
    return ThreadItem(
        **to_public_item(thread).model_dump(),
        replies=[to_public_item(reply) for reply in thread.replies],
    )
