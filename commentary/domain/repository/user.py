"""User lookup interface."""

from abc import ABC, abstractmethod
from typing import Optional

from commentary.domain.model.user import User
from commentary.domain.value import UserId


class UserRepository(ABC):
    """Read-only access to users owned by the account module."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass
