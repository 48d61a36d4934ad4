"""PostgreSQL implementation of Content repository."""

from sqlalchemy import exists, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from remark.domain.repository import ContentRepository
from remark.domain.value import ContentId, ContentType
from remark.persistence.tables import courses_table, tutorials_table


class PostgresContentRepository(ContentRepository):
    """PostgreSQL implementation of ContentRepository.

    Reads the tutorials and courses tables owned by the content modules.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def exists(self, content_type: ContentType, content_id: ContentId) -> bool:
        """Check whether a tutorial or course exists."""
        table = tutorials_table if content_type == ContentType.TUTORIAL else courses_table
        stmt = select(exists().where(table.c.id == content_id))
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def count_published_tutorials(self) -> int:
        """Count published tutorials."""
        stmt = (
            select(func.count())
            .select_from(tutorials_table)
            .where(tutorials_table.c.is_published.is_(true()))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
