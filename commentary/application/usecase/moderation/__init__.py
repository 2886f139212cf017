"""Moderation use cases."""

from .batch_moderate import (
    BatchModerateRequest,
    BatchModerateResponse,
    BatchModerateUseCase,
)
from .moderate_comment import (
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)
from .permanent_delete import (
    PermanentDeleteRequest,
    PermanentDeleteResponse,
    PermanentDeleteUseCase,
)
from .toggle_pin import TogglePinRequest, TogglePinResponse, TogglePinUseCase

__all__ = [
    "BatchModerateRequest",
    "BatchModerateResponse",
    "BatchModerateUseCase",
    "ModerateCommentRequest",
    "ModerateCommentResponse",
    "ModerateCommentUseCase",
    "PermanentDeleteRequest",
    "PermanentDeleteResponse",
    "PermanentDeleteUseCase",
    "TogglePinRequest",
    "TogglePinResponse",
    "TogglePinUseCase",
]
