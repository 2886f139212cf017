"""Post lookup interface."""

from abc import ABC, abstractmethod
from typing import Optional

from commentary.domain.model.post import Post
from commentary.domain.value import PostId


class PostRepository(ABC):
    """Read-only access to posts owned by the content module."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass
