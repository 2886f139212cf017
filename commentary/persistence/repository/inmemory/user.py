"""In-memory user repository for testing."""

from typing import Optional

from commentary.domain.model import User
from commentary.domain.repository import UserRepository
from commentary.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.db = database

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.db.users.get(user_id)
