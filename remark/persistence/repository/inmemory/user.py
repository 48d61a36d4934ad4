"""In-memory user directory for testing."""

from typing import Optional

from remark.domain.repository.user import UserRepository
from remark.domain.value import UserId, UserProfile


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, UserProfile] = {}

    def add(self, profile: UserProfile) -> None:
        """Register a user profile."""
        self._profiles[profile.user_id] = profile

    async def get_profile(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a user's display profile."""
        return self._profiles.get(user_id)
