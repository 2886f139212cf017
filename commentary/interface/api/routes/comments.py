"""Comment routes.

Public routes (posting, liking, reporting, reading a post's threads) and
admin moderation routes. Admin routes require the ``is_admin`` claim.
"""

from ipaddress import ip_address
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, Request, status
from pydantic import BaseModel, Field

from commentary.application.usecase.base import PageResponse
from commentary.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    EditCommentRequest,
    EditCommentResponse,
    EditCommentUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    ThreadItem,
)
from commentary.application.usecase.like import (
    GetLikeStatusRequest,
    GetLikeStatusResponse,
    GetLikeStatusUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from commentary.application.usecase.listing import (
    GetStatsResponse,
    GetStatsUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    ListPostCommentsRequest,
    ListPostCommentsUseCase,
    ListReportsRequest,
    ListReportsUseCase,
    ListTrashRequest,
    ListTrashUseCase,
)
from commentary.application.usecase.moderation import (
    BatchModerateRequest,
    BatchModerateResponse,
    BatchModerateUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
    PermanentDeleteRequest,
    PermanentDeleteResponse,
    PermanentDeleteUseCase,
    TogglePinRequest,
    TogglePinResponse,
    TogglePinUseCase,
)
from commentary.application.usecase.report import (
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
    ReportItem,
    ResolveReportRequest,
    ResolveReportResponse,
    ResolveReportUseCase,
)
from commentary.config import AuthSettings
from commentary.domain.error import DomainError
from commentary.domain.value import (
    CommentSortOrder,
    CommentStatus,
    ReportAction,
    ReportReason,
    ReportStatus,
)
from commentary.interface.api.auth import optional_user, require_admin, require_user
from commentary.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)

MAX_IP_ADDRESS_LENGTH = 45  # comments.ip_address column size


# ============================================================================
# API request bodies
# ============================================================================


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    post_id: UUID
    content: str = Field(min_length=1)  # Length limit is policy, checked in domain
    parent_id: UUID | None = None  # Comment being replied to


class EditCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str = Field(min_length=1)


class ReportCommentAPIRequest(BaseModel):
    """API request for reporting a comment."""

    reason: ReportReason
    details: str | None = None


class ResolveReportAPIRequest(BaseModel):
    """API request for deciding a report."""

    action: ReportAction
    delete_comment: bool = False


class BatchAPIRequest(BaseModel):
    """API request for batch moderation."""

    comment_ids: list[UUID]


def _client_ip(request: Request) -> str | None:
    # Client-controlled: only a parseable address that fits the column is kept
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        try:
            address = str(ip_address(forwarded.split(",")[0].strip()))
        except ValueError:
            address = None
        if address is not None and len(address) <= MAX_IP_ADDRESS_LENGTH:
            return address
        logfire.warn("Ignoring malformed X-Forwarded-For", value=forwarded[:64])
    return request.client.host if request.client else None


# ============================================================================
# Public routes
# ============================================================================


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    body: CreateCommentAPIRequest,
    request: Request,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on a post or reply to a comment.

    Anonymous callers are accepted only when anonymous comments are enabled.
    """
    user = require_user(auth_token, auth_settings) if auth_token else None
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=str(body.post_id),
                content=body.content,
                author_id=user.user_id if user else None,
                parent_id=str(body.parent_id) if body.parent_id else None,
                ip_address=_client_ip(request),
                user_agent=request.headers.get("user-agent"),
            )
        )
    except DomainError as e:
        logfire.warn("Comment creation failed", error=str(e))
        raise to_http_exception(e)


@router.get("/post/{post_id}", response_model=PageResponse[ThreadItem])
async def list_post_comments(
    post_id: UUID,
    list_post_comments_use_case: FromDishka[ListPostCommentsUseCase],
    auth_settings: FromDishka[AuthSettings],
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    sort: CommentSortOrder = Query(default=CommentSortOrder.NEWEST),
    auth_token: str | None = Cookie(default=None),
) -> PageResponse[ThreadItem]:
    """List the approved threads of a post, pinned first."""
    viewer = optional_user(auth_token, auth_settings)
    try:
        return await list_post_comments_use_case.execute(
            ListPostCommentsRequest(
                post_id=str(post_id),
                page=page,
                limit=limit,
                sort=sort,
                viewer_id=viewer.user_id if viewer else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


# ============================================================================
# Admin routes (fixed paths, registered before /{comment_id})
# ============================================================================


@router.get("", response_model=PageResponse[CommentItem])
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    auth_settings: FromDishka[AuthSettings],
    status_filter: CommentStatus | None = Query(default=None, alias="status"),
    post_id: UUID | None = Query(default=None),
    search: str | None = Query(default=None),
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> PageResponse[CommentItem]:
    """List active comments for moderation, newest first."""
    require_admin(auth_token, auth_settings)
    try:
        return await list_comments_use_case.execute(
            ListCommentsRequest(
                status=status_filter,
                post_id=str(post_id) if post_id else None,
                search=search,
                page=page,
                limit=limit,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/admin/trash", response_model=PageResponse[CommentItem])
async def list_trash(
    list_trash_use_case: FromDishka[ListTrashUseCase],
    auth_settings: FromDishka[AuthSettings],
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> PageResponse[CommentItem]:
    """List trashed comments, most recently trashed first."""
    require_admin(auth_token, auth_settings)
    try:
        return await list_trash_use_case.execute(ListTrashRequest(page=page, limit=limit))
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/admin/reports", response_model=PageResponse[ReportItem])
async def list_reports(
    list_reports_use_case: FromDishka[ListReportsUseCase],
    auth_settings: FromDishka[AuthSettings],
    status_filter: ReportStatus = Query(default=ReportStatus.PENDING, alias="status"),
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> PageResponse[ReportItem]:
    """List reports (pending by default), newest first."""
    require_admin(auth_token, auth_settings)
    try:
        return await list_reports_use_case.execute(
            ListReportsRequest(status=status_filter, page=page, limit=limit)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.patch("/admin/reports/{report_id}", response_model=ResolveReportResponse)
async def resolve_report(
    report_id: UUID,
    body: ResolveReportAPIRequest,
    resolve_report_use_case: FromDishka[ResolveReportUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> ResolveReportResponse:
    """Resolve or dismiss a pending report, optionally trashing the comment."""
    admin = require_admin(auth_token, auth_settings)
    try:
        response = await resolve_report_use_case.execute(
            ResolveReportRequest(
                report_id=str(report_id),
                action=body.action,
                delete_comment=body.delete_comment,
            )
        )
    except DomainError as e:
        logfire.warn("Report resolution failed", report_id=str(report_id), error=str(e))
        raise to_http_exception(e)
    logfire.info(
        "Report decided by admin",
        report_id=str(report_id),
        admin_id=admin.user_id,
        action=body.action.value,
    )
    return response


@router.get("/admin/stats", response_model=GetStatsResponse)
async def get_stats(
    get_stats_use_case: FromDishka[GetStatsUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> GetStatsResponse:
    """Moderation dashboard counters."""
    require_admin(auth_token, auth_settings)
    return await get_stats_use_case.execute()


async def _batch(
    action: str,
    body: BatchAPIRequest,
    use_case: BatchModerateUseCase,
) -> BatchModerateResponse:
    try:
        return await use_case.execute(
            BatchModerateRequest(
                comment_ids=[str(comment_id) for comment_id in body.comment_ids],
                action=action,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.patch("/batch-approve", response_model=BatchModerateResponse)
async def batch_approve(
    body: BatchAPIRequest,
    batch_moderate_use_case: FromDishka[BatchModerateUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> BatchModerateResponse:
    """Approve many comments; unknown or trashed ids are reported back."""
    require_admin(auth_token, auth_settings)
    return await _batch("approve", body, batch_moderate_use_case)


@router.patch("/batch-reject", response_model=BatchModerateResponse)
async def batch_reject(
    body: BatchAPIRequest,
    batch_moderate_use_case: FromDishka[BatchModerateUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> BatchModerateResponse:
    """Reject many comments; unknown or trashed ids are reported back."""
    require_admin(auth_token, auth_settings)
    return await _batch("reject", body, batch_moderate_use_case)


# ============================================================================
# Single-comment routes
# ============================================================================


@router.get("/{comment_id}", response_model=GetCommentResponse)
async def get_comment(
    comment_id: UUID,
    get_comment_use_case: FromDishka[GetCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> GetCommentResponse:
    """Admin detail view of a comment, trashed included."""
    require_admin(auth_token, auth_settings)
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(comment_id=str(comment_id))
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.patch("/{comment_id}/edit", response_model=EditCommentResponse)
async def edit_comment(
    comment_id: UUID,
    body: EditCommentAPIRequest,
    edit_comment_use_case: FromDishka[EditCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> EditCommentResponse:
    """Rewrite one of your own comments."""
    user = require_user(auth_token, auth_settings)
    try:
        return await edit_comment_use_case.execute(
            EditCommentRequest(
                comment_id=str(comment_id),
                user_id=user.user_id,
                content=body.content,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{comment_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    comment_id: UUID,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> ToggleLikeResponse:
    """Like a comment, or take the like back."""
    user = require_user(auth_token, auth_settings)
    try:
        return await toggle_like_use_case.execute(
            ToggleLikeRequest(comment_id=str(comment_id), user_id=user.user_id)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{comment_id}/like-status", response_model=GetLikeStatusResponse)
async def get_like_status(
    comment_id: UUID,
    get_like_status_use_case: FromDishka[GetLikeStatusUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> GetLikeStatusResponse:
    """The caller's like state and the comment's like count."""
    viewer = optional_user(auth_token, auth_settings)
    try:
        return await get_like_status_use_case.execute(
            GetLikeStatusRequest(
                comment_id=str(comment_id),
                user_id=viewer.user_id if viewer else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post(
    "/{comment_id}/report",
    response_model=ReportCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_comment(
    comment_id: UUID,
    body: ReportCommentAPIRequest,
    report_comment_use_case: FromDishka[ReportCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> ReportCommentResponse:
    """Flag a comment for moderator review."""
    user = require_user(auth_token, auth_settings)
    try:
        return await report_comment_use_case.execute(
            ReportCommentRequest(
                comment_id=str(comment_id),
                reporter_id=user.user_id,
                reason=body.reason.value,
                details=body.details,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


async def _moderate(
    comment_id: UUID,
    action: str,
    use_case: ModerateCommentUseCase,
) -> ModerateCommentResponse:
    try:
        return await use_case.execute(
            ModerateCommentRequest(comment_id=str(comment_id), action=action)
        )
    except DomainError as e:
        logfire.warn(
            "Moderation failed",
            comment_id=str(comment_id),
            action=action,
            error=str(e),
        )
        raise to_http_exception(e)


@router.patch("/{comment_id}/approve", response_model=ModerateCommentResponse)
async def approve_comment(
    comment_id: UUID,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> ModerateCommentResponse:
    """Publish a comment."""
    require_admin(auth_token, auth_settings)
    return await _moderate(comment_id, "approve", moderate_comment_use_case)


@router.patch("/{comment_id}/reject", response_model=ModerateCommentResponse)
async def reject_comment(
    comment_id: UUID,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> ModerateCommentResponse:
    """Send a comment back to review."""
    require_admin(auth_token, auth_settings)
    return await _moderate(comment_id, "reject", moderate_comment_use_case)


@router.patch("/{comment_id}/soft-delete", response_model=ModerateCommentResponse)
async def soft_delete_comment(
    comment_id: UUID,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> ModerateCommentResponse:
    """Move a comment to the trash."""
    require_admin(auth_token, auth_settings)
    return await _moderate(comment_id, "soft_delete", moderate_comment_use_case)


@router.patch("/{comment_id}/restore", response_model=ModerateCommentResponse)
async def restore_comment(
    comment_id: UUID,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> ModerateCommentResponse:
    """Take a comment out of the trash; it returns to review."""
    require_admin(auth_token, auth_settings)
    return await _moderate(comment_id, "restore", moderate_comment_use_case)


@router.patch("/{comment_id}/pin", response_model=TogglePinResponse)
async def toggle_pin(
    comment_id: UUID,
    toggle_pin_use_case: FromDishka[TogglePinUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> TogglePinResponse:
    """Pin or unpin a top-level comment."""
    require_admin(auth_token, auth_settings)
    try:
        return await toggle_pin_use_case.execute(
            TogglePinRequest(comment_id=str(comment_id))
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/{comment_id}/permanent", response_model=PermanentDeleteResponse)
async def permanent_delete(
    comment_id: UUID,
    permanent_delete_use_case: FromDishka[PermanentDeleteUseCase],
    auth_settings: FromDishka[AuthSettings],
    auth_token: str | None = Cookie(default=None),
) -> PermanentDeleteResponse:
    """Irreversibly remove a trashed comment."""
    admin = require_admin(auth_token, auth_settings)
    try:
        response = await permanent_delete_use_case.execute(
            PermanentDeleteRequest(comment_id=str(comment_id))
        )
    except DomainError as e:
        raise to_http_exception(e)
    logfire.info(
        "Comment purged by admin",
        comment_id=str(comment_id),
        admin_id=admin.user_id,
        purged_count=len(response.purged_ids),
    )
    return response
