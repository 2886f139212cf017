"""In-memory like ledger repository for testing."""

from typing import Sequence

from commentary.domain.model import Like
from commentary.domain.repository import LikeRepository
from commentary.domain.value import CommentId, UserId

from .database import InMemoryDatabase


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.db = database

    def _find(self, comment_id: CommentId, user_id: UserId) -> Like | None:
        return next(
            (
                like
                for like in self.db.likes.values()
                if like.comment_id == comment_id and like.user_id == user_id
            ),
            None,
        )

    async def exists(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Check whether a ledger row exists."""
        return self._find(comment_id, user_id) is not None

    async def add(self, like: Like) -> bool:
        """Insert a ledger row unless (comment, user) is taken."""
        if self._find(like.comment_id, like.user_id) is not None:
            return False
        self.db.likes[like.id] = like
        return True

    async def remove(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a ledger row."""
        like = self._find(comment_id, user_id)
        if like is None:
            return False
        del self.db.likes[like.id]
        return True

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count ledger rows for a comment."""
        return sum(1 for like in self.db.likes.values() if like.comment_id == comment_id)

    async def find_liked(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Find which comments a user likes."""
        wanted = set(comment_ids)
        return {
            like.comment_id
            for like in self.db.likes.values()
            if like.user_id == user_id and like.comment_id in wanted
        }

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every ledger row for the given comments."""
        doomed = set(comment_ids)
        removed = [
            like_id
            for like_id, like in self.db.likes.items()
            if like.comment_id in doomed
        ]
        for like_id in removed:
            del self.db.likes[like_id]
        return len(removed)
