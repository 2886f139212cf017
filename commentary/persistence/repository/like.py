"""PostgreSQL implementation of the like ledger repository."""

from typing import Sequence, Set

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import Like
from commentary.domain.repository import LikeRepository
from commentary.domain.value import CommentId, UserId
from commentary.persistence.mappers import like_to_dict
from commentary.persistence.tables import comment_likes_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def exists(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Check whether a ledger row exists."""
        stmt = select(comment_likes_table.c.id).where(
            and_(
                comment_likes_table.c.comment_id == comment_id,
                comment_likes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def add(self, like: Like) -> bool:
        """Insert a ledger row, ignoring duplicates."""
        stmt = (
            insert(comment_likes_table)
            .values(**like_to_dict(like))
            .on_conflict_do_nothing(constraint="uq_comment_like")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def remove(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a ledger row."""
        stmt = delete(comment_likes_table).where(
            and_(
                comment_likes_table.c.comment_id == comment_id,
                comment_likes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count ledger rows for a comment."""
        stmt = (
            select(func.count())
            .select_from(comment_likes_table)
            .where(comment_likes_table.c.comment_id == comment_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_liked(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> Set[CommentId]:
        """Find which comments a user likes (batch query)."""
        if not comment_ids:
            return set()

        stmt = select(comment_likes_table.c.comment_id).where(
            and_(
                comment_likes_table.c.user_id == user_id,
                comment_likes_table.c.comment_id.in_(comment_ids),
            )
        )
        result = await self.session.execute(stmt)
        return {CommentId(row.comment_id) for row in result.fetchall()}

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every ledger row for the given comments."""
        if not comment_ids:
            return 0
        stmt = delete(comment_likes_table).where(
            comment_likes_table.c.comment_id.in_(comment_ids)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
