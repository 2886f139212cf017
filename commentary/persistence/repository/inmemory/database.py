"""Shared in-memory store backing the in-memory repositories."""

from contextlib import contextmanager
from typing import Iterator

from commentary.domain.model import Comment, Like, Post, Report, User
from commentary.domain.value import CommentId, LikeId, PostId, ReportId, UserId


class InMemoryDatabase:
    """Process-local tables for tests and local runs.

    One instance lives for the whole container so that state survives
    across requests, like a real database would.
    """

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.posts: dict[PostId, Post] = {}
        self.comments: dict[CommentId, Comment] = {}
        self.likes: dict[LikeId, Like] = {}
        self.reports: dict[ReportId, Report] = {}

    def add_user(self, user: User) -> User:
        """Seed a user."""
        self.users[user.id] = user
        return user

    def add_post(self, post: Post) -> Post:
        """Seed a post."""
        self.posts[post.id] = post
        return post

    @contextmanager
    def snapshot(self) -> Iterator[None]:
        """Roll mutable tables back if the block raises."""
        saved = (dict(self.comments), dict(self.likes), dict(self.reports))
        try:
            yield
        except BaseException:
            self.comments, self.likes, self.reports = saved
            raise
