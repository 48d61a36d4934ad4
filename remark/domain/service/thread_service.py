"""Thread read service.

Assembles paginated views of a discussion: top-level comments with their
nested replies, flat reply listings, and moderation statistics.
"""

import math
from dataclasses import dataclass, field

import logfire

from remark.config import ThreadSettings
from remark.domain.error import NotFoundError, ValidationError
from remark.domain.model import MAX_COMMENT_LEVEL, Comment, CommentStats
from remark.domain.repository import CommentRepository, ContentRepository
from remark.domain.value import (
    CommentId,
    ContentId,
    ContentType,
    SortField,
    SortOrder,
)

from .base import Service


@dataclass
class CommentNode:
    """Node in a rendered comment thread.

    Holds a comment and its approved replies, oldest first.
    """

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)


@dataclass
class Pagination:
    """Page metadata for a listing."""

    current_page: int
    total_pages: int
    total_comments: int
    has_next: bool
    has_prev: bool
    limit: int

    @classmethod
    def build(cls, page: int, limit: int, total_comments: int) -> "Pagination":
        """Compute page metadata for a 1-based page."""
        total_pages = math.ceil(total_comments / limit)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_comments=total_comments,
            has_next=page < total_pages,
            has_prev=page > 1,
            limit=limit,
        )


@dataclass
class ThreadPage:
    """A page of top-level comments with nested replies."""

    comments: list[CommentNode]
    pagination: Pagination


@dataclass
class RepliesPage:
    """A page of direct replies to one comment."""

    replies: list[Comment]
    pagination: Pagination


class ThreadService(Service):
    """Domain service for reading comment threads."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_repository: ContentRepository,
        thread_settings: ThreadSettings,
    ) -> None:
        """Initialize thread service.

        Args:
            comment_repository: Comment repository
            content_repository: Tutorial/course catalog
            thread_settings: Paging configuration
        """
        self.comment_repository = comment_repository
        self.content_repository = content_repository
        self.settings = thread_settings

    async def get_comments_by_content(
        self,
        content_id: ContentId,
        page: int = 1,
        limit: int | None = None,
        sort_by: SortField = SortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
        content_type: ContentType | None = None,
    ) -> ThreadPage:
        """Get a page of top-level comments with up to 3 levels of replies.

        Only approved comments are returned. Top-level comments follow the
        requested sort; replies at every level are ordered oldest first.

        Args:
            content_id: Tutorial or course ID
            page: 1-based page number
            limit: Page size (defaults to the configured page size)
            sort_by: Sort field for top-level comments
            sort_order: Sort direction for top-level comments
            content_type: Restrict to one content type (None for any)

        Returns:
            Page of comment trees with pagination metadata

        Raises:
            ValidationError: If page or limit is out of range
        """
        if limit is None:
            limit = self.settings.default_page_size
        with logfire.span(
            "thread_service.get_comments_by_content",
            content_id=str(content_id),
            page=page,
            limit=limit,
            sort_by=sort_by.value,
            sort_order=sort_order.value,
        ):
            self._validate_paging(page, limit)

            comments = await self.comment_repository.find_top_level(
                content_id=content_id,
                content_type=content_type,
                sort_by=sort_by,
                sort_order=sort_order,
                limit=limit,
                offset=(page - 1) * limit,
            )
            total = await self.comment_repository.count_top_level(
                content_id=content_id, content_type=content_type
            )

            nodes = [CommentNode(comment=c) for c in comments]
            await self._populate_replies(nodes)

            logfire.info(
                "Thread page retrieved",
                content_id=str(content_id),
                count=len(nodes),
                total=total,
            )
            return ThreadPage(
                comments=nodes,
                pagination=Pagination.build(page, limit, total),
            )

    async def get_comment_replies(
        self,
        parent_id: CommentId,
        page: int = 1,
        limit: int | None = None,
    ) -> RepliesPage:
        """Get a flat page of approved direct replies, oldest first.

        Args:
            parent_id: Parent comment ID
            page: 1-based page number
            limit: Page size (defaults to the configured replies page size)

        Returns:
            Page of replies with pagination metadata

        Raises:
            ValidationError: If page or limit is out of range
            NotFoundError: If the parent comment doesn't exist
        """
        if limit is None:
            limit = self.settings.default_replies_page_size
        with logfire.span(
            "thread_service.get_comment_replies",
            parent_id=str(parent_id),
            page=page,
            limit=limit,
        ):
            self._validate_paging(page, limit)

            if await self.comment_repository.find_by_id(parent_id) is None:
                logfire.warn("Parent comment not found", parent_id=str(parent_id))
                raise NotFoundError("Comment", str(parent_id))

            replies = await self.comment_repository.find_replies_page(
                parent_id=parent_id, limit=limit, offset=(page - 1) * limit
            )
            total = await self.comment_repository.count_replies(parent_id)

            return RepliesPage(
                replies=replies,
                pagination=Pagination.build(page, limit, total),
            )

    async def get_comment_stats(self) -> CommentStats:
        """Aggregate moderation statistics over every comment.

        The per-tutorial average only counts comments on tutorials, divided
        by the number of published tutorials.

        Returns:
            Comment statistics
        """
        with logfire.span("thread_service.get_comment_stats"):
            repo = self.comment_repository
            total = await repo.count()
            approved = await repo.count(is_approved=True)
            pending = await repo.count(is_approved=False)
            reported = await repo.count(is_reported=True)
            replies = await repo.count(replies_only=True)
            tutorial_comments = await repo.count(content_type=ContentType.TUTORIAL)
            published = await self.content_repository.count_published_tutorials()
            top = await repo.top_commenters(limit=self.settings.top_commenters_limit)

            average = round(tutorial_comments / published, 2) if published > 0 else 0.0

            stats = CommentStats(
                total_comments=total,
                approved_comments=approved,
                pending_comments=pending,
                reported_comments=reported,
                total_replies=replies,
                average_comments_per_tutorial=average,
                top_commenters=top,
            )
            logfire.info(
                "Comment stats computed",
                total=total,
                reported=reported,
                published_tutorials=published,
            )
            return stats

    async def _populate_replies(self, roots: list[CommentNode]) -> None:
        """Attach approved replies level by level, one batch query per level."""
        frontier = roots
        for _ in range(MAX_COMMENT_LEVEL):
            wanted = [rid for node in frontier for rid in node.comment.replies]
            if not wanted:
                return

            loaded = await self.comment_repository.find_by_ids(wanted)
            by_id = {c.id: c for c in loaded if c.is_approved}

            next_frontier: list[CommentNode] = []
            for node in frontier:
                children = [by_id[rid] for rid in node.comment.replies if rid in by_id]
                children.sort(key=lambda c: (c.created_at, str(c.id)))
                node.replies = [CommentNode(comment=c) for c in children]
                next_frontier.extend(node.replies)
            frontier = next_frontier

    def _validate_paging(self, page: int, limit: int) -> None:
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if limit < 1 or limit > self.settings.max_page_size:
            raise ValidationError(
                f"Limit must be between 1 and {self.settings.max_page_size}"
            )
