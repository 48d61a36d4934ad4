"""User directory repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from remark.domain.value import UserId, UserProfile


class UserRepository(ABC):
    """Read-only view of user profiles.

    Only used when a comment is created, to snapshot author display data.
    """

    @abstractmethod
    async def get_profile(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a user's display profile.

        Args:
            user_id: The user's unique identifier

        Returns:
            The profile if found, None otherwise
        """
        pass
