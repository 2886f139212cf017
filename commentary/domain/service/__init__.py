"""Domain services for the comment engine."""

from .base import Service
from .comment_service import CommentService
from .event_service import EventPublisher, EventService
from .like_service import LikeService
from .listing_service import ListingService
from .moderation_service import BatchModerationResult, ModerationService
from .report_service import ReportService

__all__ = [
    "BatchModerationResult",
    "CommentService",
    "EventPublisher",
    "EventService",
    "LikeService",
    "ListingService",
    "ModerationService",
    "ReportService",
    "Service",
]
