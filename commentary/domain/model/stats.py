"""Moderation dashboard counters."""

from pydantic import Field

from commentary.domain.model.common import DomainModel


class CommentStats(DomainModel):
    """Snapshot of the moderation queue."""

    total: int = Field(ge=0)  # active (non-trashed) comments
    pending: int = Field(ge=0)
    approved: int = Field(ge=0)
    trashed: int = Field(ge=0)
    pending_reports: int = Field(ge=0)
