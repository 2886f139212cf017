"""Like ledger repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from commentary.domain.model.like import Like
from commentary.domain.value import CommentId, UserId


class LikeRepository(ABC):
    """Repository for the like ledger.

    The ledger only records membership. Keeping ``Comment.likes_count`` in
    step is the caller's job, inside the same transaction.
    """

    @abstractmethod
    async def exists(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Check whether a user likes a comment.

        Args:
            comment_id: Comment ID
            user_id: User ID

        Returns:
            True if a ledger row exists
        """
        pass

    @abstractmethod
    async def add(self, like: Like) -> bool:
        """Insert a ledger row.

        Args:
            like: The like to record

        Returns:
            True if a row was inserted, False if one already existed
        """
        pass

    @abstractmethod
    async def remove(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a ledger row.

        Args:
            comment_id: Comment ID
            user_id: User ID

        Returns:
            True if a row was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count ledger rows for a comment.

        Args:
            comment_id: Comment ID

        Returns:
            Number of users who like the comment
        """
        pass

    @abstractmethod
    async def find_liked(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Find which of the given comments a user likes (batch query).

        Args:
            user_id: User ID
            comment_ids: Comment IDs to check

        Returns:
            Subset of ``comment_ids`` the user likes
        """
        pass

    @abstractmethod
    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every ledger row for the given comments.

        Args:
            comment_ids: Comment IDs

        Returns:
            Number of rows deleted
        """
        pass
