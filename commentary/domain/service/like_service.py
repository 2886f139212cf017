"""Like ledger domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from commentary.domain.error import NotFoundError, UnauthorizedError
from commentary.domain.model import Like, LikeStatus
from commentary.domain.repository import CommentRepository, LikeRepository
from commentary.domain.value import CommentId, LikeId, UserId

from .base import Service


class LikeService(Service):
    """Domain service for like toggling.

    ``Comment.likes_count`` mirrors the ledger. Both change in one
    transaction with the comment row locked, so concurrent toggles on the
    same comment serialize and the count moves only by rows actually
    inserted or deleted.
    """

    def __init__(
        self,
        like_repository: LikeRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize like service.

        Args:
            like_repository: Like ledger repository
            comment_repository: Comment repository
        """
        self.like_repository = like_repository
        self.comment_repository = comment_repository

    async def toggle_like(
        self, comment_id: CommentId, user_id: UserId | None
    ) -> LikeStatus:
        """Like a comment, or unlike it if already liked.

        Args:
            comment_id: Comment ID
            user_id: Authenticated user ID

        Returns:
            Post-toggle like state and the authoritative count

        Raises:
            UnauthorizedError: If no user is given
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "like_service.toggle_like",
            comment_id=str(comment_id),
            user_id=str(user_id) if user_id else None,
        ):
            if user_id is None:
                raise UnauthorizedError("like comments")

            comment = await self.comment_repository.lock_by_id(comment_id)
            if comment is None:
                logfire.warn("Like on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            if await self.like_repository.exists(comment_id, user_id):
                removed = await self.like_repository.remove(comment_id, user_id)
                liked = False
                delta = -1 if removed else 0
            else:
                added = await self.like_repository.add(
                    Like(
                        id=LikeId(uuid4()),
                        comment_id=comment_id,
                        user_id=user_id,
                        created_at=datetime.now(),
                    )
                )
                liked = True
                delta = 1 if added else 0

            likes_count = await self.comment_repository.adjust_likes_count(
                comment_id, delta
            )
            logfire.info(
                "Comment like toggled",
                comment_id=str(comment_id),
                user_id=str(user_id),
                liked=liked,
                likes_count=likes_count,
            )
            return LikeStatus(liked=liked, likes_count=likes_count)

    async def get_like_status(
        self, comment_id: CommentId, user_id: UserId | None = None
    ) -> LikeStatus:
        """Get a user's like state on a comment.

        Anonymous callers always see ``liked=False``.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))

        liked = False
        if user_id is not None:
            liked = await self.like_repository.exists(comment_id, user_id)
        return LikeStatus(liked=liked, likes_count=comment.likes_count)

    async def get_liked_comment_ids(
        self, user_id: UserId | None, comment_ids: list[CommentId]
    ) -> set[CommentId]:
        """Check which comments a user likes.

        Args:
            user_id: User ID (None yields an empty set)
            comment_ids: Comment IDs to check

        Returns:
            Subset of ``comment_ids`` the user likes
        """
        if user_id is None or not comment_ids:
            return set()
        # Batch query to avoid N+1
        return await self.like_repository.find_liked(user_id, comment_ids)
