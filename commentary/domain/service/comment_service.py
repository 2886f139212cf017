"""Comment domain service.

Owns comment creation (threading) and author edits. Moderation lives in
ModerationService.
"""

from datetime import datetime
from uuid import uuid4

import logfire

from commentary.config import CommentSettings
from commentary.domain.error import (
    InvalidStateError,
    NotAuthorizedError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from commentary.domain.model import Comment, CommentCreated
from commentary.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from commentary.domain.value import (
    ANONYMOUS_USERNAME,
    CommentId,
    CommentStatus,
    PostId,
    UserId,
)

from .base import Service
from .event_service import EventService


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        event_service: EventService,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post lookup
            user_repository: User lookup
            event_service: Domain event emission
            settings: Comment policy
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.event_service = event_service
        self.settings = settings

    def validate_content(self, content: str) -> str:
        """Check comment content against the configured limits.

        Args:
            content: Raw content

        Returns:
            Content with surrounding whitespace removed

        Raises:
            ValidationError: If content is blank or too long
        """
        stripped = content.strip()
        if not stripped:
            raise ValidationError("Comment content cannot be empty")
        if len(stripped) > self.settings.max_content_length:
            raise ValidationError(
                f"Comment content cannot exceed {self.settings.max_content_length} characters"
            )
        return stripped

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId | None,
        content: str,
        parent_id: CommentId | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Comment:
        """Create a top-level comment or a reply.

        Replies are flattened: whatever comment is being answered, the reply
        hangs off that comment's thread root.

        Args:
            post_id: Post ID
            author_id: Author user ID (None for anonymous)
            content: Comment text
            parent_id: Comment being replied to (None for top-level)
            ip_address: Submitter IP address
            user_agent: Submitter user agent

        Returns:
            Created comment

        Raises:
            ValidationError: If content is invalid or parent is on another post
            UnauthorizedError: If anonymous and anonymous comments are disabled
            NotFoundError: If post, author or parent does not exist
            InvalidStateError: If the parent comment is trashed
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id) if author_id else None,
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = self.validate_content(content)

            if author_id is None:
                if not self.settings.allow_anonymous:
                    raise UnauthorizedError("create comments")
                author_username = ANONYMOUS_USERNAME
            else:
                author = await self.user_repository.find_by_id(author_id)
                if author is None:
                    raise NotFoundError("User", str(author_id))
                author_username = author.username

            post = await self.post_repository.find_by_id(post_id)
            if post is None or post.deleted_at is not None:
                logfire.warn("Comment on non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            root_id = None
            reply_to_username = None
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")
                if parent.is_trashed:
                    raise InvalidStateError("Cannot reply to a trashed comment")

                # Flatten: a reply to a reply joins the same thread root
                root_id = parent.id if parent.is_top_level else parent.root_id
                reply_to_username = parent.author_username

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                author_username=author_username,
                content=content,
                root_id=root_id,
                reply_to_id=parent_id,
                reply_to_username=reply_to_username,
                status=(
                    CommentStatus.APPROVED
                    if self.settings.auto_approve
                    else CommentStatus.PENDING
                ),
                ip_address=ip_address,
                user_agent=user_agent,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                root_id=str(root_id) if root_id else None,
                status=saved.status.value,
            )

            await self.event_service.emit(CommentCreated(comment=saved))
            return saved

    async def edit_comment(
        self, comment_id: CommentId, user_id: UserId | None, content: str
    ) -> Comment:
        """Let an author rewrite their own comment.

        Args:
            comment_id: Comment ID
            user_id: Editing user ID
            content: New content

        Returns:
            Updated comment, flagged as edited

        Raises:
            UnauthorizedError: If no user is given
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
            InvalidStateError: If the comment is trashed
            ValidationError: If content is invalid
        """
        with logfire.span(
            "comment_service.edit_comment",
            comment_id=str(comment_id),
            user_id=str(user_id) if user_id else None,
        ):
            if user_id is None:
                raise UnauthorizedError("edit comments")

            comment = await self.comment_repository.lock_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))
            if comment.author_id != user_id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("comment", str(comment_id), str(user_id))
            if comment.is_trashed:
                raise InvalidStateError(f"Cannot edit trashed comment {comment_id}")

            content = self.validate_content(content)
            updated = comment.model_copy(
                update={
                    "content": content,
                    "is_edited": True,
                    "updated_at": datetime.now(),
                }
            )
            saved = await self.comment_repository.save(updated)
            logfire.info(
                "Comment edited",
                comment_id=str(comment_id),
                content_length=len(content),
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID, trashed or not.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        return comment
