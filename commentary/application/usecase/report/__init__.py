"""Report use cases."""

from .item import ReportItem, to_report_item
from .report_comment import (
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)
from .resolve_report import (
    ResolveReportRequest,
    ResolveReportResponse,
    ResolveReportUseCase,
)

__all__ = [
    "ReportCommentRequest",
    "ReportCommentResponse",
    "ReportCommentUseCase",
    "ReportItem",
    "ResolveReportRequest",
    "ResolveReportResponse",
    "ResolveReportUseCase",
    "to_report_item",
]
