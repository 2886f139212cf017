"""Like use cases."""

from .get_like_status import (
    GetLikeStatusRequest,
    GetLikeStatusResponse,
    GetLikeStatusUseCase,
)
from .toggle_like import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase

__all__ = [
    "GetLikeStatusRequest",
    "GetLikeStatusResponse",
    "GetLikeStatusUseCase",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
]
