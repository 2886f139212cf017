"""Post reference.

Posts are owned by the blog's content module. The comment engine only
needs to know that a post exists and how to label it in admin views.
"""

from datetime import datetime
from typing import Optional

from commentary.domain.model.common import DomainModel
from commentary.domain.value import PostId


class Post(DomainModel):
    """Read-only view of a blog post."""

    id: PostId
    title: str
    slug: str
    deleted_at: Optional[datetime] = None
