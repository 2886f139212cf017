"""Domain layer DI providers."""

from dishka import Scope, provide

from commentary.config import CommentSettings
from commentary.domain.repository import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    ReportRepository,
    UserRepository,
)
from commentary.domain.service import (
    CommentService,
    EventPublisher,
    EventService,
    LikeService,
    ListingService,
    ModerationService,
    ReportService,
)
from commentary.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_event_service(self, publisher: EventPublisher) -> EventService:
        """Provide domain event emission."""
        return EventService(publisher=publisher)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        event_service: EventService,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            user_repository=user_repository,
            event_service=event_service,
            settings=settings,
        )

    @provide
    def get_like_service(
        self,
        like_repository: LikeRepository,
        comment_repository: CommentRepository,
    ) -> LikeService:
        """Provide like domain service."""
        return LikeService(
            like_repository=like_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_moderation_service(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        report_repository: ReportRepository,
        event_service: EventService,
        settings: CommentSettings,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            comment_repository=comment_repository,
            like_repository=like_repository,
            report_repository=report_repository,
            event_service=event_service,
            settings=settings,
        )

    @provide
    def get_report_service(
        self,
        report_repository: ReportRepository,
        comment_repository: CommentRepository,
        moderation_service: ModerationService,
        event_service: EventService,
        settings: CommentSettings,
    ) -> ReportService:
        """Provide report domain service."""
        return ReportService(
            report_repository=report_repository,
            comment_repository=comment_repository,
            moderation_service=moderation_service,
            event_service=event_service,
            settings=settings,
        )

    @provide
    def get_listing_service(
        self,
        comment_repository: CommentRepository,
        report_repository: ReportRepository,
        like_repository: LikeRepository,
        post_repository: PostRepository,
        settings: CommentSettings,
    ) -> ListingService:
        """Provide listing domain service."""
        return ListingService(
            comment_repository=comment_repository,
            report_repository=report_repository,
            like_repository=like_repository,
            post_repository=post_repository,
            settings=settings,
        )
