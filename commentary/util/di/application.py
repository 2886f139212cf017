"""Application layer DI providers."""

from dishka import Scope, provide

from commentary.application.usecase.comment import (
    CreateCommentUseCase,
    EditCommentUseCase,
    GetCommentUseCase,
)
from commentary.application.usecase.like import GetLikeStatusUseCase, ToggleLikeUseCase
from commentary.application.usecase.listing import (
    GetStatsUseCase,
    ListCommentsUseCase,
    ListPostCommentsUseCase,
    ListReportsUseCase,
    ListTrashUseCase,
)
from commentary.application.usecase.moderation import (
    BatchModerateUseCase,
    ModerateCommentUseCase,
    PermanentDeleteUseCase,
    TogglePinUseCase,
)
from commentary.application.usecase.report import (
    ReportCommentUseCase,
    ResolveReportUseCase,
)
from commentary.domain.service import (
    CommentService,
    LikeService,
    ListingService,
    ModerationService,
    ReportService,
)
from commentary.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Comment use cases
    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide
    def get_edit_comment_use_case(
        self, comment_service: CommentService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(comment_service=comment_service)

    @provide
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    # Like use cases
    @provide
    def get_toggle_like_use_case(self, like_service: LikeService) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(like_service=like_service)

    @provide
    def get_like_status_use_case(
        self, like_service: LikeService
    ) -> GetLikeStatusUseCase:
        """Provide get like status use case."""
        return GetLikeStatusUseCase(like_service=like_service)

    # Moderation use cases
    @provide
    def get_moderate_comment_use_case(
        self, moderation_service: ModerationService
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(moderation_service=moderation_service)

    @provide
    def get_permanent_delete_use_case(
        self, moderation_service: ModerationService
    ) -> PermanentDeleteUseCase:
        """Provide permanent delete use case."""
        return PermanentDeleteUseCase(moderation_service=moderation_service)

    @provide
    def get_toggle_pin_use_case(
        self, moderation_service: ModerationService
    ) -> TogglePinUseCase:
        """Provide toggle pin use case."""
        return TogglePinUseCase(moderation_service=moderation_service)

    @provide
    def get_batch_moderate_use_case(
        self, moderation_service: ModerationService
    ) -> BatchModerateUseCase:
        """Provide batch moderation use case."""
        return BatchModerateUseCase(moderation_service=moderation_service)

    # Report use cases
    @provide
    def get_report_comment_use_case(
        self, report_service: ReportService
    ) -> ReportCommentUseCase:
        """Provide report comment use case."""
        return ReportCommentUseCase(report_service=report_service)

    @provide
    def get_resolve_report_use_case(
        self, report_service: ReportService
    ) -> ResolveReportUseCase:
        """Provide resolve report use case."""
        return ResolveReportUseCase(report_service=report_service)

    # Listing use cases
    @provide
    def get_list_comments_use_case(
        self, listing_service: ListingService
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(listing_service=listing_service)

    @provide
    def get_list_trash_use_case(self, listing_service: ListingService) -> ListTrashUseCase:
        """Provide list trash use case."""
        return ListTrashUseCase(listing_service=listing_service)

    @provide
    def get_list_reports_use_case(
        self, listing_service: ListingService
    ) -> ListReportsUseCase:
        """Provide list reports use case."""
        return ListReportsUseCase(listing_service=listing_service)

    @provide
    def get_list_post_comments_use_case(
        self, listing_service: ListingService
    ) -> ListPostCommentsUseCase:
        """Provide list post comments use case."""
        return ListPostCommentsUseCase(listing_service=listing_service)

    @provide
    def get_stats_use_case(self, listing_service: ListingService) -> GetStatsUseCase:
        """Provide get stats use case."""
        return GetStatsUseCase(listing_service=listing_service)
