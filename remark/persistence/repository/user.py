"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from remark.domain.repository import UserRepository
from remark.domain.value import UserId, UserProfile
from remark.persistence.mappers import row_to_user_profile
from remark.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get_profile(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a user's display profile.

        Args:
            user_id: User ID to look up

        Returns:
            UserProfile if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user_profile(dict(row)) if row else None
