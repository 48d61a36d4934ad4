"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from remark.domain.model.comment import Comment, Report
from remark.domain.model.stats import TopCommenter
from remark.domain.value import (
    CommentId,
    ContentId,
    ContentType,
    SortField,
    SortOrder,
    UserId,
)


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Every mutating method is a single atomic operation against the store;
    callers never read a comment, change it in memory and write it back.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments at once (batch query, any order).

        Args:
            comment_ids: Comment IDs to load

        Returns:
            The comments that exist
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        parent_id: CommentId,
        approved_only: bool = False,
    ) -> List[Comment]:
        """Find direct children of a comment, oldest first.

        This is the back-reference query (``parent_id == parent``) and is
        the source of truth the ``replies`` list is derived from.

        Args:
            parent_id: The parent comment ID
            approved_only: Whether to skip unapproved comments

        Returns:
            List of child comments ordered by created_at ascending
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        content_id: ContentId,
        content_type: Optional[ContentType] = None,
        sort_by: SortField = SortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find approved top-level comments of a tutorial or course.

        Args:
            content_id: The tutorial or course ID
            content_type: Restrict to one content type (None for any)
            sort_by: Creation time, like count or reply count
            sort_order: Sort direction
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            One page of top-level comments
        """
        pass

    @abstractmethod
    async def count_top_level(
        self,
        content_id: ContentId,
        content_type: Optional[ContentType] = None,
    ) -> int:
        """Count approved top-level comments of a tutorial or course."""
        pass

    @abstractmethod
    async def find_replies_page(
        self,
        parent_id: CommentId,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Find one page of approved direct replies, oldest first."""
        pass

    @abstractmethod
    async def count_replies(self, parent_id: CommentId) -> int:
        """Count approved direct replies of a comment."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update the whole record).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def add_reply(self, comment: Comment) -> Optional[Comment]:
        """Insert a reply and append it to its parent's replies atomically.

        The link only happens if the parent still exists and is not being
        deleted. Otherwise nothing is written.

        Args:
            comment: The reply to insert (parent_id must be set)

        Returns:
            The saved reply, or None if the parent was gone
        """
        pass

    @abstractmethod
    async def remove_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Remove a child id from a parent's replies list (if present)."""
        pass

    @abstractmethod
    async def set_replies(
        self, comment_id: CommentId, reply_ids: Sequence[CommentId]
    ) -> Optional[Comment]:
        """Overwrite a comment's replies list.

        Returns:
            The updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace a comment's body and record the previous one.

        Sets ``is_edited`` and appends the old body to ``edit_history``.

        Returns:
            The updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def toggle_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Flip the user's like and clear any dislike, atomically.

        Returns:
            The updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def toggle_dislike(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Flip the user's dislike and clear any like, atomically.

        Returns:
            The updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def add_report(
        self, comment_id: CommentId, report: Report
    ) -> Optional[Comment]:
        """Append a report unless this user already reported the comment.

        Increments ``report_count`` and sets ``is_reported`` in the same
        operation.

        Returns:
            The updated comment, or None if the comment doesn't exist or
            the user already reported it
        """
        pass

    @abstractmethod
    async def set_approval(
        self, comment_id: CommentId, is_approved: bool
    ) -> Optional[Comment]:
        """Set a comment's approval flag.

        Returns:
            The updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def clear_reports(self, comment_id: CommentId) -> Optional[Comment]:
        """Approve a comment and drop every report against it.

        Returns:
            The updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def mark_deleting(self, comment_ids: Sequence[CommentId]) -> None:
        """Flag comments as being removed by a cascading delete."""
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard delete comments.

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def count(
        self,
        is_approved: Optional[bool] = None,
        is_reported: Optional[bool] = None,
        replies_only: bool = False,
        content_type: Optional[ContentType] = None,
    ) -> int:
        """Count comments matching every given filter.

        Args:
            is_approved: Filter on the approval flag (None for any)
            is_reported: Filter on the reported flag (None for any)
            replies_only: Only count comments with level > 0
            content_type: Filter on content type (None for any)

        Returns:
            Number of matching comments
        """
        pass

    @abstractmethod
    async def top_commenters(self, limit: int = 10) -> List[TopCommenter]:
        """Rank authors by number of approved comments, highest first."""
        pass
