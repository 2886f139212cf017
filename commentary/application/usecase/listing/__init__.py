"""Listing use cases."""

from .get_stats import GetStatsResponse, GetStatsUseCase
from .list_comments import ListCommentsRequest, ListCommentsUseCase
from .list_post_comments import ListPostCommentsRequest, ListPostCommentsUseCase
from .list_reports import ListReportsRequest, ListReportsUseCase
from .list_trash import ListTrashRequest, ListTrashUseCase

__all__ = [
    "GetStatsResponse",
    "GetStatsUseCase",
    "ListCommentsRequest",
    "ListCommentsUseCase",
    "ListPostCommentsRequest",
    "ListPostCommentsUseCase",
    "ListReportsRequest",
    "ListReportsUseCase",
    "ListTrashRequest",
    "ListTrashUseCase",
]
