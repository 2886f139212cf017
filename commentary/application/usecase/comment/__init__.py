"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .edit_comment import EditCommentRequest, EditCommentResponse, EditCommentUseCase
from .get_comment import GetCommentRequest, GetCommentResponse, GetCommentUseCase
from .item import (
    CommentItem,
    PublicCommentItem,
    ThreadItem,
    to_comment_item,
    to_thread_item,
)

__all__ = [
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "EditCommentRequest",
    "EditCommentResponse",
    "EditCommentUseCase",
    "GetCommentRequest",
    "GetCommentResponse",
    "GetCommentUseCase",
    "PublicCommentItem",
    "ThreadItem",
    "to_comment_item",
    "to_thread_item",
]
