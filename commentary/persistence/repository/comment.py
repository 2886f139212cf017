"""PostgreSQL implementation of Comment repository."""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from sqlalchemy import Select, asc, delete, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import Comment
from commentary.domain.repository import (
    CommentCriteria,
    CommentOrder,
    CommentRepository,
)
from commentary.domain.value import CommentId
from commentary.persistence.mappers import comment_to_dict, row_to_comment
from commentary.persistence.tables import comments_table

ORDERINGS = {
    CommentOrder.NEWEST: [desc(comments_table.c.created_at)],
    CommentOrder.OLDEST: [asc(comments_table.c.created_at)],
    CommentOrder.POPULAR: [
        desc(comments_table.c.likes_count),
        desc(comments_table.c.created_at),
    ],
    CommentOrder.RECENTLY_TRASHED: [desc(comments_table.c.deleted_at)],
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _filter(self, stmt: Select, criteria: CommentCriteria) -> Select:
        """Apply criteria to a select statement."""
        c = comments_table.c
        if criteria.trashed is True:
            stmt = stmt.where(c.deleted_at.is_not(None))
        elif criteria.trashed is False:
            stmt = stmt.where(c.deleted_at.is_(None))
        if criteria.post_id is not None:
            stmt = stmt.where(c.post_id == criteria.post_id)
        if criteria.status is not None:
            stmt = stmt.where(c.status == criteria.status.value)
        if criteria.top_level_only:
            stmt = stmt.where(c.root_id.is_(None))
        if criteria.root_ids is not None:
            stmt = stmt.where(c.root_id.in_(criteria.root_ids))
        if criteria.search:
            pattern = f"%{_escape_like(criteria.search)}%"
            stmt = stmt.where(
                or_(
                    c.content.ilike(pattern, escape="\\"),
                    c.author_username.ilike(pattern, escape="\\"),
                )
            )
        return stmt

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def lock_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment with SELECT ... FOR UPDATE."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find(
        self,
        criteria: CommentCriteria,
        order: CommentOrder = CommentOrder.NEWEST,
        pinned_first: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments matching criteria."""
        stmt = self._filter(select(comments_table), criteria)

        ordering = list(ORDERINGS[order])
        if pinned_first:
            ordering.insert(0, desc(comments_table.c.is_pinned))
        # Tie-break on id for stable pagination
        stmt = stmt.order_by(*ordering, comments_table.c.id)

        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count(self, criteria: CommentCriteria) -> int:
        """Count comments matching criteria."""
        stmt = self._filter(select(func.count()).select_from(comments_table), criteria)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    def _comment_to_db_dict(self, comment: Comment) -> Dict[str, Any]:
        # likes_count is only written through adjust_likes_count
        comment_dict = comment_to_dict(comment)
        comment_dict.pop("likes_count")
        return comment_dict

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = await self.find_by_id(comment.id)

        if existing:
            comment_dict = self._comment_to_db_dict(comment)
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()

        return await self.find_by_id(comment.id) or comment

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments (hard delete)."""
        if not comment_ids:
            return 0
        stmt = delete(comments_table).where(comments_table.c.id.in_(comment_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def adjust_likes_count(self, comment_id: CommentId, delta: int) -> int:
        """Atomically add ``delta`` to likes_count."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(likes_count=comments_table.c.likes_count + delta)
            .returning(comments_table.c.likes_count)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Run the block inside a SAVEPOINT."""
        async with self.session.begin_nested():
            yield
