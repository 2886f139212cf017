"""In-memory comment repository for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

from commentary.domain.model.comment import Comment
from commentary.domain.repository.comment import (
    CommentCriteria,
    CommentOrder,
    CommentRepository,
)
from commentary.domain.value import CommentId

from .database import InMemoryDatabase


def _matches(comment: Comment, criteria: CommentCriteria) -> bool:
    if criteria.trashed is not None and comment.is_trashed != criteria.trashed:
        return False
    if criteria.post_id is not None and comment.post_id != criteria.post_id:
        return False
    if criteria.status is not None and comment.status != criteria.status:
        return False
    if criteria.top_level_only and not comment.is_top_level:
        return False
    if criteria.root_ids is not None and comment.root_id not in criteria.root_ids:
        return False
    if criteria.search:
        needle = criteria.search.lower()
        if (
            needle not in comment.content.lower()
            and needle not in str(comment.author_username).lower()
        ):
            return False
    return True


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.db = database

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self.db.comments.get(comment_id)

    async def lock_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID (no await in between, so no lock needed)."""
        return self.db.comments.get(comment_id)

    async def find(
        self,
        criteria: CommentCriteria,
        order: CommentOrder = CommentOrder.NEWEST,
        pinned_first: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments matching criteria."""
        comments = [c for c in self.db.comments.values() if _matches(c, criteria)]

        # Stable sorts, least significant key first
        comments.sort(key=lambda c: str(c.id))
        if order == CommentOrder.OLDEST:
            comments.sort(key=lambda c: c.created_at)
        elif order == CommentOrder.POPULAR:
            comments.sort(key=lambda c: (c.likes_count, c.created_at), reverse=True)
        elif order == CommentOrder.RECENTLY_TRASHED:
            comments.sort(key=lambda c: c.deleted_at or c.created_at, reverse=True)
        else:
            comments.sort(key=lambda c: c.created_at, reverse=True)
        if pinned_first:
            comments.sort(key=lambda c: not c.is_pinned)

        if limit is None:
            return comments[offset:]
        return comments[offset : offset + limit]

    async def count(self, criteria: CommentCriteria) -> int:
        """Count comments matching criteria."""
        return sum(1 for c in self.db.comments.values() if _matches(c, criteria))

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment.

        The stored like count wins over the incoming one, as in the
        PostgreSQL repository.
        """
        existing = self.db.comments.get(comment.id)
        if existing is not None and existing.likes_count != comment.likes_count:
            comment = comment.model_copy(update={"likes_count": existing.likes_count})
        self.db.comments[comment.id] = comment
        return comment

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments."""
        deleted = 0
        for comment_id in comment_ids:
            if self.db.comments.pop(comment_id, None) is not None:
                deleted += 1
        return deleted

    async def adjust_likes_count(self, comment_id: CommentId, delta: int) -> int:
        """Add ``delta`` to likes_count."""
        comment = self.db.comments[comment_id]
        updated = comment.model_copy(
            update={"likes_count": comment.likes_count + delta}
        )
        self.db.comments[comment_id] = updated
        return updated.likes_count

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Roll back the block's changes if it raises."""
        with self.db.snapshot():
            yield
