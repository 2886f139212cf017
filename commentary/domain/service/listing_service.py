"""Query and listing domain service."""

import logfire

from commentary.config import CommentSettings
from commentary.domain.error import NotFoundError, ValidationError
from commentary.domain.model import (
    Comment,
    CommentStats,
    CommentThread,
    CommentView,
    Page,
    Report,
)
from commentary.domain.repository import (
    CommentCriteria,
    CommentOrder,
    CommentRepository,
    LikeRepository,
    PostRepository,
    ReportRepository,
)
from commentary.domain.value import (
    CommentId,
    CommentSortOrder,
    CommentStatus,
    PostId,
    ReportStatus,
    UserId,
)

from .base import Service

SORT_ORDERS = {
    CommentSortOrder.NEWEST: CommentOrder.NEWEST,
    CommentSortOrder.OLDEST: CommentOrder.OLDEST,
    CommentSortOrder.POPULAR: CommentOrder.POPULAR,
}


class ListingService(Service):
    """Read-side queries for admin views and the public post page.

    Active listings never include trashed comments and the trash listing
    never includes active ones.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        report_repository: ReportRepository,
        like_repository: LikeRepository,
        post_repository: PostRepository,
        settings: CommentSettings,
    ) -> None:
        """Initialize listing service.

        Args:
            comment_repository: Comment repository
            report_repository: Report repository
            like_repository: Like ledger repository
            post_repository: Post lookup
            settings: Comment policy (page sizes)
        """
        self.comment_repository = comment_repository
        self.report_repository = report_repository
        self.like_repository = like_repository
        self.post_repository = post_repository
        self.settings = settings

    def _paging(self, page: int, limit: int | None) -> tuple[int, int]:
        """Validate paging input and return ``(limit, offset)``.

        Raises:
            ValidationError: If page or limit is out of range
        """
        if limit is None:
            limit = self.settings.default_page_size
        if page < 1:
            raise ValidationError("Page must be at least 1")
        if limit < 1 or limit > self.settings.max_page_size:
            raise ValidationError(
                f"Limit must be between 1 and {self.settings.max_page_size}"
            )
        return limit, (page - 1) * limit

    async def list_comments(
        self,
        status: CommentStatus | None = None,
        post_id: PostId | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> Page[Comment]:
        """List active comments for moderation, newest first.

        Args:
            status: Only comments with this status
            post_id: Only comments on this post
            search: Case-insensitive match on content or author username
            page: 1-based page number
            limit: Page size (defaults to ``default_page_size``)

        Returns:
            Page of comments

        Raises:
            ValidationError: If paging is out of range
        """
        limit, offset = self._paging(page, limit)
        with logfire.span(
            "listing_service.list_comments",
            status=status.value if status else None,
            post_id=str(post_id) if post_id else None,
            page=page,
            limit=limit,
        ):
            criteria = CommentCriteria(
                post_id=post_id,
                status=status,
                trashed=False,
                search=(search or "").strip() or None,
            )
            items = await self.comment_repository.find(
                criteria, order=CommentOrder.NEWEST, limit=limit, offset=offset
            )
            total = await self.comment_repository.count(criteria)
            return Page.build(items, total, page, limit)

    async def list_trash(self, page: int = 1, limit: int | None = None) -> Page[Comment]:
        """List trashed comments, most recently trashed first.

        Raises:
            ValidationError: If paging is out of range
        """
        limit, offset = self._paging(page, limit)
        with logfire.span("listing_service.list_trash", page=page, limit=limit):
            criteria = CommentCriteria(trashed=True)
            items = await self.comment_repository.find(
                criteria,
                order=CommentOrder.RECENTLY_TRASHED,
                limit=limit,
                offset=offset,
            )
            total = await self.comment_repository.count(criteria)
            return Page.build(items, total, page, limit)

    async def list_reports(
        self,
        status: ReportStatus | None = ReportStatus.PENDING,
        page: int = 1,
        limit: int | None = None,
    ) -> Page[Report]:
        """List reports, newest first.

        Args:
            status: Only reports with this status (None for all)
            page: 1-based page number
            limit: Page size

        Raises:
            ValidationError: If paging is out of range
        """
        limit, offset = self._paging(page, limit)
        with logfire.span(
            "listing_service.list_reports",
            status=status.value if status else None,
            page=page,
            limit=limit,
        ):
            items = await self.report_repository.find_by_status(
                status, limit=limit, offset=offset
            )
            total = await self.report_repository.count_by_status(status)
            return Page.build(items, total, page, limit)

    async def list_post_comments(
        self,
        post_id: PostId,
        page: int = 1,
        limit: int | None = None,
        sort: CommentSortOrder = CommentSortOrder.NEWEST,
        viewer_id: UserId | None = None,
    ) -> Page[CommentThread]:
        """List the public threads of a post.

        Only approved, non-trashed comments are visible. Pinned threads come
        first, then ``sort`` applies. Paging counts top-level comments only;
        each thread carries all of its visible replies.

        Args:
            post_id: Post ID
            page: 1-based page number
            limit: Threads per page
            sort: Order of top-level comments
            viewer_id: Viewing user, for ``is_liked`` flags

        Returns:
            Page of threads

        Raises:
            NotFoundError: If the post does not exist
            ValidationError: If paging is out of range
        """
        limit, offset = self._paging(page, limit)
        with logfire.span(
            "listing_service.list_post_comments",
            post_id=str(post_id),
            page=page,
            limit=limit,
            sort=sort.value,
        ):
            post = await self.post_repository.find_by_id(post_id)
            if post is None or post.deleted_at is not None:
                raise NotFoundError("Post", str(post_id))

            criteria = CommentCriteria(
                post_id=post_id,
                status=CommentStatus.APPROVED,
                trashed=False,
                top_level_only=True,
            )
            roots = await self.comment_repository.find(
                criteria,
                order=SORT_ORDERS[sort],
                pinned_first=True,
                limit=limit,
                offset=offset,
            )
            total = await self.comment_repository.count(criteria)

            replies: list[Comment] = []
            if roots:
                replies = await self.comment_repository.find(
                    CommentCriteria(
                        root_ids=tuple(root.id for root in roots),
                        status=CommentStatus.APPROVED,
                        trashed=False,
                    ),
                    order=CommentOrder.OLDEST,
                )

            liked: set = set()
            if viewer_id is not None and roots:
                liked = await self.like_repository.find_liked(
                    viewer_id, [c.id for c in roots + replies]
                )

            by_root: dict[CommentId, list[CommentView]] = {root.id: [] for root in roots}
            for reply in replies:
                by_root[reply.root_id].append(
                    CommentView(comment=reply, is_liked=reply.id in liked)
                )

            threads = [
                CommentThread(
                    comment=root,
                    is_liked=root.id in liked,
                    replies=by_root[root.id],
                )
                for root in roots
            ]
            logfire.info(
                "Post comments listed",
                post_id=str(post_id),
                thread_count=len(threads),
                reply_count=len(replies),
            )
            return Page.build(threads, total, page, limit)

    async def get_stats(self) -> CommentStats:
        """Count comments per moderation state and pending reports."""
        with logfire.span("listing_service.get_stats"):
            return CommentStats(
                total=await self.comment_repository.count(
                    CommentCriteria(trashed=False)
                ),
                pending=await self.comment_repository.count(
                    CommentCriteria(status=CommentStatus.PENDING, trashed=False)
                ),
                approved=await self.comment_repository.count(
                    CommentCriteria(status=CommentStatus.APPROVED, trashed=False)
                ),
                trashed=await self.comment_repository.count(
                    CommentCriteria(trashed=True)
                ),
                pending_reports=await self.report_repository.count_by_status(
                    ReportStatus.PENDING
                ),
            )
