"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from commentary.config import AuthSettings
from commentary.domain.model import Comment, Post, User
from commentary.domain.value import (
    CommentId,
    CommentStatus,
    PostId,
    UserId,
    Username,
)
from commentary.persistence.repository.inmemory import InMemoryDatabase
from commentary.util.jwt import create_token

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    """A fixed timestamp ``minutes`` after BASE_TIME, for deterministic ordering."""
    return BASE_TIME + timedelta(minutes=minutes)


def seed_user(db: InMemoryDatabase, username: str = "alice") -> User:
    """Add a user to the in-memory store."""
    return db.add_user(User(id=UserId(uuid4()), username=Username(username)))


def seed_post(db: InMemoryDatabase, title: str = "Hello World") -> Post:
    """Add a post to the in-memory store."""
    post_id = PostId(uuid4())
    slug = "-".join(title.lower().split()) or f"post-{str(post_id)[:8]}"
    return db.add_post(Post(id=post_id, title=title, slug=slug))


def seed_comment(
    db: InMemoryDatabase,
    post: Post,
    author: User | None = None,
    content: str = "A comment",
    status: CommentStatus = CommentStatus.APPROVED,
    root: Comment | None = None,
    reply_to: Comment | None = None,
    created_at: datetime | None = None,
    **extra,
) -> Comment:
    """Store a comment directly, bypassing the service layer.

    ``reply_to`` defaults to ``root`` for replies.
    """
    created_at = created_at or datetime.now()
    if root is not None and reply_to is None:
        reply_to = root
    comment = Comment(
        id=CommentId(uuid4()),
        post_id=post.id,
        author_id=author.id if author else None,
        author_username=author.username if author else Username("anonymous"),
        content=content,
        root_id=root.id if root else None,
        reply_to_id=reply_to.id if reply_to else None,
        reply_to_username=reply_to.author_username if reply_to else None,
        status=status,
        created_at=created_at,
        updated_at=created_at,
        **extra,
    )
    db.comments[comment.id] = comment
    return comment


def make_token(
    user: User, settings: AuthSettings | None = None, is_admin: bool = False
) -> str:
    """Mint an auth token for a seeded user."""
    return create_token(
        str(user.id),
        str(user.username),
        settings or AuthSettings(),
        is_admin=is_admin,
    )
