"""Comment repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from enum import Enum
from typing import Optional, Sequence

from commentary.domain.model.comment import Comment
from commentary.domain.value import CommentId, CommentStatus, PostId
from commentary.domain.value.common import ValueObject


class CommentOrder(str, Enum):
    """Sort orders supported by comment listings."""

    NEWEST = "newest"  # created_at descending
    OLDEST = "oldest"  # created_at ascending
    POPULAR = "popular"  # likes_count descending, then newest
    RECENTLY_TRASHED = "recently_trashed"  # deleted_at descending


class CommentCriteria(ValueObject):
    """Filter for comment listings.

    ``trashed`` selects between the active set (False) and the trash (True).
    None matches both and is only used for internal lookups such as
    collecting a thread before purging it.
    """

    post_id: Optional[PostId] = None
    status: Optional[CommentStatus] = None
    trashed: Optional[bool] = False
    top_level_only: bool = False
    root_ids: Optional[tuple[CommentId, ...]] = None
    search: Optional[str] = None


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, trashed or not.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def lock_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment and lock its row until the transaction ends.

        Concurrent read-modify-write sequences on the same comment serialize
        on this lock; different comments never contend.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find(
        self,
        criteria: CommentCriteria,
        order: CommentOrder = CommentOrder.NEWEST,
        pinned_first: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments matching criteria.

        Args:
            criteria: Filter to apply
            order: Sort order
            pinned_first: Whether pinned comments sort ahead of the rest
            limit: Maximum number of comments to return (None for all)
            offset: Number of comments to skip

        Returns:
            Matching comments in the requested order
        """
        pass

    @abstractmethod
    async def count(self, criteria: CommentCriteria) -> int:
        """Count comments matching criteria.

        Args:
            criteria: Filter to apply

        Returns:
            Number of matching comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Permanently remove comments.

        Args:
            comment_ids: The comment IDs to remove

        Returns:
            Number of rows removed
        """
        pass

    @abstractmethod
    async def adjust_likes_count(self, comment_id: CommentId, delta: int) -> int:
        """Atomically add ``delta`` to a comment's like count.

        Args:
            comment_id: Comment ID
            delta: Amount to add (may be negative or zero)

        Returns:
            The like count after the adjustment
        """
        pass

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a nested transaction scoped to one unit of work.

        Changes made inside are committed or rolled back together without
        affecting work done earlier in the enclosing transaction.
        """
        pass
