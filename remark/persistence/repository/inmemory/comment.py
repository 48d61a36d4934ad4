"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from remark.domain.model.comment import Comment, EditRecord, Report
from remark.domain.model.stats import TopCommenter
from remark.domain.repository.comment import CommentRepository
from remark.domain.value import (
    CommentId,
    ContentId,
    ContentType,
    SortField,
    SortOrder,
    UserId,
)


def _oldest_first(comment: Comment) -> tuple:
    return (comment.created_at, str(comment.id))


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Mutations never await, so each one is atomic with respect to other
    coroutines, which mirrors the single-statement updates in PostgreSQL.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _replace(self, comment_id: CommentId, **changes) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(update=changes)
        self._comments[comment_id] = updated
        return updated

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Find several comments at once."""
        return [self._comments[cid] for cid in comment_ids if cid in self._comments]

    async def find_children(
        self,
        parent_id: CommentId,
        approved_only: bool = False,
    ) -> list[Comment]:
        """Find direct children of a comment, oldest first."""
        children = [c for c in self._comments.values() if c.parent_id == parent_id]
        if approved_only:
            children = [c for c in children if c.is_approved]
        children.sort(key=_oldest_first)
        return children

    def _top_level(
        self, content_id: ContentId, content_type: Optional[ContentType]
    ) -> list[Comment]:
        return [
            c
            for c in self._comments.values()
            if c.content_id == content_id
            and c.parent_id is None
            and c.is_approved
            and (content_type is None or c.content_type == content_type)
        ]

    async def find_top_level(
        self,
        content_id: ContentId,
        content_type: Optional[ContentType] = None,
        sort_by: SortField = SortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find approved top-level comments, sorted and paginated."""
        comments = self._top_level(content_id, content_type)

        if sort_by == SortField.LIKES:
            sort_key = lambda c: (c.like_count, str(c.id))  # noqa: E731
        elif sort_by == SortField.REPLIES:
            sort_key = lambda c: (c.reply_count, str(c.id))  # noqa: E731
        else:
            sort_key = _oldest_first

        comments.sort(key=sort_key, reverse=sort_order == SortOrder.DESC)
        return comments[offset : offset + limit]

    async def count_top_level(
        self,
        content_id: ContentId,
        content_type: Optional[ContentType] = None,
    ) -> int:
        """Count approved top-level comments."""
        return len(self._top_level(content_id, content_type))

    async def find_replies_page(
        self,
        parent_id: CommentId,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Comment]:
        """Find one page of approved direct replies."""
        replies = await self.find_children(parent_id, approved_only=True)
        return replies[offset : offset + limit]

    async def count_replies(self, parent_id: CommentId) -> int:
        """Count approved direct replies."""
        return len(await self.find_children(parent_id, approved_only=True))

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def add_reply(self, comment: Comment) -> Optional[Comment]:
        """Insert a reply and link it from its parent."""
        parent = self._comments.get(comment.parent_id)
        if parent is None or parent.is_deleting:
            return None
        self._replace(
            parent.id, replies=[*parent.replies, comment.id], updated_at=datetime.now()
        )
        self._comments[comment.id] = comment
        return comment

    async def remove_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Unlink a child from its parent's replies list."""
        parent = self._comments.get(parent_id)
        if parent is not None:
            self._replace(
                parent_id,
                replies=[rid for rid in parent.replies if rid != reply_id],
                updated_at=datetime.now(),
            )

    async def set_replies(
        self, comment_id: CommentId, reply_ids: Sequence[CommentId]
    ) -> Optional[Comment]:
        """Overwrite a comment's replies list."""
        return self._replace(
            comment_id, replies=list(reply_ids), updated_at=datetime.now()
        )

    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the body and record the previous one."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        return self._replace(
            comment_id,
            content=content,
            is_edited=True,
            edit_history=[
                *comment.edit_history,
                EditRecord(content=comment.content, edited_at=edited_at),
            ],
            updated_at=edited_at,
        )

    async def toggle_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Flip a like and clear the matching dislike."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        if user_id in comment.likes:
            likes, dislikes = comment.likes - {user_id}, comment.dislikes
        else:
            likes, dislikes = comment.likes | {user_id}, comment.dislikes - {user_id}
        return self._replace(
            comment_id, likes=likes, dislikes=dislikes, updated_at=datetime.now()
        )

    async def toggle_dislike(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Flip a dislike and clear the matching like."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        if user_id in comment.dislikes:
            likes, dislikes = comment.likes, comment.dislikes - {user_id}
        else:
            likes, dislikes = comment.likes - {user_id}, comment.dislikes | {user_id}
        return self._replace(
            comment_id, likes=likes, dislikes=dislikes, updated_at=datetime.now()
        )

    async def add_report(
        self, comment_id: CommentId, report: Report
    ) -> Optional[Comment]:
        """Append a report unless this user already reported the comment."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.has_reported(report.user_id):
            return None
        return self._replace(
            comment_id,
            reports=[*comment.reports, report],
            report_count=comment.report_count + 1,
            is_reported=True,
            updated_at=datetime.now(),
        )

    async def set_approval(
        self, comment_id: CommentId, is_approved: bool
    ) -> Optional[Comment]:
        """Set the approval flag."""
        return self._replace(
            comment_id, is_approved=is_approved, updated_at=datetime.now()
        )

    async def clear_reports(self, comment_id: CommentId) -> Optional[Comment]:
        """Approve the comment and reset its report state."""
        return self._replace(
            comment_id,
            is_approved=True,
            is_reported=False,
            report_count=0,
            reports=[],
            updated_at=datetime.now(),
        )

    async def mark_deleting(self, comment_ids: Sequence[CommentId]) -> None:
        """Flag comments as being deleted."""
        for comment_id in comment_ids:
            self._replace(comment_id, is_deleting=True)

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard delete comments, cascading to orphaned descendants."""
        pending = [cid for cid in comment_ids if cid in self._comments]
        deleted = 0
        while pending:
            comment_id = pending.pop()
            if self._comments.pop(comment_id, None) is None:
                continue
            deleted += 1
            # Same effect as the parent_id ON DELETE CASCADE foreign key
            pending.extend(
                c.id for c in self._comments.values() if c.parent_id == comment_id
            )
        return deleted

    async def count(
        self,
        is_approved: Optional[bool] = None,
        is_reported: Optional[bool] = None,
        replies_only: bool = False,
        content_type: Optional[ContentType] = None,
    ) -> int:
        """Count comments matching every given filter."""
        return sum(
            1
            for c in self._comments.values()
            if (is_approved is None or c.is_approved == is_approved)
            and (is_reported is None or c.is_reported == is_reported)
            and (not replies_only or c.level > 0)
            and (content_type is None or c.content_type == content_type)
        )

    async def top_commenters(self, limit: int = 10) -> list[TopCommenter]:
        """Rank authors by approved comment count."""
        counts: dict[UserId, int] = {}
        names: dict[UserId, tuple[datetime, str]] = {}
        for c in self._comments.values():
            if not c.is_approved:
                continue
            user_id = c.author.user_id
            counts[user_id] = counts.get(user_id, 0) + 1
            if user_id not in names or names[user_id][0] < c.created_at:
                names[user_id] = (c.created_at, c.author.name)

        ranked = sorted(counts.items(), key=lambda item: (-item[1], str(item[0])))
        return [
            TopCommenter(user_id=user_id, name=names[user_id][1], comment_count=count)
            for user_id, count in ranked[:limit]
        ]
