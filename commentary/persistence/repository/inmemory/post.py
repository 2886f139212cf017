"""In-memory post repository for testing."""

from typing import Optional

from commentary.domain.model import Post
from commentary.domain.repository import PostRepository
from commentary.domain.value import PostId

from .database import InMemoryDatabase


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.db = database

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self.db.posts.get(post_id)
