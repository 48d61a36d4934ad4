"""Content catalog repository interface."""

from abc import ABC, abstractmethod

from remark.domain.value import ContentId, ContentType


class ContentRepository(ABC):
    """Read-only view of the tutorials and courses comments attach to.

    The tutorial and course modules own these records; the comment engine
    only asks whether they exist.
    """

    @abstractmethod
    async def exists(self, content_type: ContentType, content_id: ContentId) -> bool:
        """Check whether a tutorial or course exists.

        Args:
            content_type: Tutorial or course
            content_id: The content ID

        Returns:
            True if the content exists
        """
        pass

    @abstractmethod
    async def count_published_tutorials(self) -> int:
        """Count tutorials that are published."""
        pass
