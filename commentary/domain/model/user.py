"""User reference.

Users are owned by the platform's account module; comments denormalize the
username at creation time.
"""

from typing import Optional

from commentary.domain.model.common import DomainModel
from commentary.domain.value import UserId, Username


class User(DomainModel):
    """Read-only view of a platform user."""

    id: UserId
    username: Username
    avatar_url: Optional[str] = None
