"""In-memory content catalog for testing."""

from remark.domain.repository.content import ContentRepository
from remark.domain.value import ContentId, ContentType


class InMemoryContentRepository(ContentRepository):
    """In-memory implementation of ContentRepository for testing."""

    def __init__(self) -> None:
        self._tutorials: dict[ContentId, bool] = {}
        self._courses: set[ContentId] = set()

    def add_tutorial(self, tutorial_id: ContentId, is_published: bool = True) -> None:
        """Register a tutorial."""
        self._tutorials[tutorial_id] = is_published

    def add_course(self, course_id: ContentId) -> None:
        """Register a course."""
        self._courses.add(course_id)

    async def exists(self, content_type: ContentType, content_id: ContentId) -> bool:
        """Check whether a tutorial or course exists."""
        if content_type == ContentType.TUTORIAL:
            return content_id in self._tutorials
        return content_id in self._courses

    async def count_published_tutorials(self) -> int:
        """Count published tutorials."""
        return sum(1 for published in self._tutorials.values() if published)
