"""PostgreSQL implementation of Comment repository.

Reactions, reply links and reports are stored as arrays/JSONB on the
comment row and mutated with single UPDATE statements, so concurrent
requests never overwrite each other's changes.
"""

from datetime import datetime
from typing import Any, List, Optional, Sequence

from sqlalchemy import (
    ColumnElement,
    and_,
    any_,
    asc,
    case,
    delete,
    desc,
    false,
    func,
    insert,
    literal,
    select,
    true,
    update,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID, aggregate_order_by
from sqlalchemy.ext.asyncio import AsyncSession

from remark.domain.model import Comment, Report, TopCommenter
from remark.domain.repository import CommentRepository
from remark.domain.value import (
    CommentId,
    ContentId,
    ContentType,
    SortField,
    SortOrder,
    UserId,
)
from remark.persistence.mappers import comment_to_dict, report_to_json, row_to_comment
from remark.persistence.tables import comments_table

_c = comments_table.c


def _uuid_param(value: Any) -> ColumnElement:
    return literal(value, type_=UUID)


def _array_append(column: ColumnElement, value: Any) -> ColumnElement:
    return func.array_append(column, _uuid_param(value), type_=column.type)


def _array_remove(column: ColumnElement, value: Any) -> ColumnElement:
    return func.array_remove(column, _uuid_param(value), type_=column.type)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _update_returning(self, stmt) -> Optional[Comment]:
        result = await self.session.execute(stmt.returning(comments_table))
        row = result.mappings().first()
        if row is None:
            return None
        await self.session.flush()
        return row_to_comment(dict(row))

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(_c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(dict(row)) if row else None

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments with one query."""
        if not comment_ids:
            return []
        stmt = select(comments_table).where(_c.id.in_(list(comment_ids)))
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def find_children(
        self,
        parent_id: CommentId,
        approved_only: bool = False,
    ) -> List[Comment]:
        """Find direct child comments of a parent comment."""
        stmt = select(comments_table).where(_c.parent_id == parent_id)

        if approved_only:
            stmt = stmt.where(_c.is_approved.is_(true()))

        stmt = stmt.order_by(asc(_c.created_at), asc(_c.id))

        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    def _top_level_filter(
        self, content_id: ContentId, content_type: Optional[ContentType]
    ) -> ColumnElement:
        conditions = [
            _c.content_id == content_id,
            _c.parent_id.is_(None),
            _c.is_approved.is_(true()),
        ]
        if content_type is not None:
            conditions.append(_c.content_type == content_type.value)
        return and_(*conditions)

    async def find_top_level(
        self,
        content_id: ContentId,
        content_type: Optional[ContentType] = None,
        sort_by: SortField = SortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find approved top-level comments, sorted and paginated."""
        if sort_by == SortField.LIKES:
            sort_column = func.cardinality(_c.likes)
        elif sort_by == SortField.REPLIES:
            sort_column = func.cardinality(_c.replies)
        else:
            sort_column = _c.created_at

        direction = desc if sort_order == SortOrder.DESC else asc

        stmt = (
            select(comments_table)
            .where(self._top_level_filter(content_id, content_type))
            # id as tie-breaker keeps pages stable
            .order_by(direction(sort_column), direction(_c.id))
            .limit(limit)
            .offset(offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def count_top_level(
        self,
        content_id: ContentId,
        content_type: Optional[ContentType] = None,
    ) -> int:
        """Count approved top-level comments."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(self._top_level_filter(content_id, content_type))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_replies_page(
        self,
        parent_id: CommentId,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Find one page of approved direct replies, oldest first."""
        stmt = (
            select(comments_table)
            .where(_c.parent_id == parent_id)
            .where(_c.is_approved.is_(true()))
            .order_by(asc(_c.created_at), asc(_c.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def count_replies(self, parent_id: CommentId) -> int:
        """Count approved direct replies."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(_c.parent_id == parent_id)
            .where(_c.is_approved.is_(true()))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = await self.find_by_id(comment.id)
        comment_dict = comment_to_dict(comment)

        if existing:
            stmt = (
                update(comments_table)
                .where(_c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = insert(comments_table).values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(comment.id) or comment

    async def add_reply(self, comment: Comment) -> Optional[Comment]:
        """Insert a reply and link it from its parent in one savepoint."""
        async with self.session.begin_nested():
            # Linking first takes the parent's row lock, so a concurrent
            # delete either sees the new reply or blocks the link.
            link = (
                update(comments_table)
                .where(_c.id == comment.parent_id)
                .where(_c.is_deleting.is_(false()))
                .values(
                    replies=_array_append(_c.replies, comment.id),
                    updated_at=func.now(),
                )
                .returning(_c.id)
            )
            linked = await self.session.execute(link)
            if linked.first() is None:
                return None

            await self.session.execute(
                insert(comments_table).values(**comment_to_dict(comment))
            )

        await self.session.flush()
        return await self.find_by_id(comment.id)

    async def remove_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Unlink a child from its parent's replies list."""
        stmt = (
            update(comments_table)
            .where(_c.id == parent_id)
            .values(
                replies=_array_remove(_c.replies, reply_id),
                updated_at=func.now(),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_replies(
        self, comment_id: CommentId, reply_ids: Sequence[CommentId]
    ) -> Optional[Comment]:
        """Overwrite a comment's replies list."""
        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .values(replies=list(reply_ids), updated_at=func.now())
        )
        return await self._update_returning(stmt)

    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the body, pushing the old one onto edit_history."""
        # Right-hand sides read the row as it was before this UPDATE
        previous = func.jsonb_build_array(
            func.jsonb_build_object(
                "content",
                _c.content,
                "edited_at",
                edited_at.isoformat(),
                type_=JSONB,
            ),
            type_=JSONB,
        )
        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .values(
                content=content,
                is_edited=True,
                edit_history=_c.edit_history.op("||", return_type=JSONB)(previous),
                updated_at=edited_at,
            )
        )
        return await self._update_returning(stmt)

    async def toggle_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Flip a like and clear the matching dislike in one statement."""
        already_liked = _uuid_param(user_id) == any_(_c.likes)
        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .values(
                likes=case(
                    (already_liked, _array_remove(_c.likes, user_id)),
                    else_=_array_append(_c.likes, user_id),
                ),
                dislikes=case(
                    (already_liked, _c.dislikes),
                    else_=_array_remove(_c.dislikes, user_id),
                ),
                updated_at=func.now(),
            )
        )
        return await self._update_returning(stmt)

    async def toggle_dislike(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Flip a dislike and clear the matching like in one statement."""
        already_disliked = _uuid_param(user_id) == any_(_c.dislikes)
        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .values(
                dislikes=case(
                    (already_disliked, _array_remove(_c.dislikes, user_id)),
                    else_=_array_append(_c.dislikes, user_id),
                ),
                likes=case(
                    (already_disliked, _c.likes),
                    else_=_array_remove(_c.likes, user_id),
                ),
                updated_at=func.now(),
            )
        )
        return await self._update_returning(stmt)

    async def add_report(
        self, comment_id: CommentId, report: Report
    ) -> Optional[Comment]:
        """Append a report unless the reporter is already on the row."""
        reporter_probe = [{"user_id": str(report.user_id)}]
        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .where(~_c.reports.contains(reporter_probe))
            .values(
                reports=_c.reports.op("||", return_type=JSONB)(
                    literal([report_to_json(report)], type_=JSONB)
                ),
                report_count=_c.report_count + 1,
                is_reported=True,
                updated_at=func.now(),
            )
        )
        return await self._update_returning(stmt)

    async def set_approval(
        self, comment_id: CommentId, is_approved: bool
    ) -> Optional[Comment]:
        """Set the approval flag."""
        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .values(is_approved=is_approved, updated_at=func.now())
        )
        return await self._update_returning(stmt)

    async def clear_reports(self, comment_id: CommentId) -> Optional[Comment]:
        """Approve the comment and reset its report state."""
        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .values(
                is_approved=True,
                is_reported=False,
                report_count=0,
                reports=literal([], type_=JSONB),
                updated_at=func.now(),
            )
        )
        return await self._update_returning(stmt)

    async def mark_deleting(self, comment_ids: Sequence[CommentId]) -> None:
        """Flag a subtree as being deleted."""
        if not comment_ids:
            return
        stmt = (
            update(comments_table)
            .where(_c.id.in_(list(comment_ids)))
            .values(is_deleting=True)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard delete comments by id."""
        if not comment_ids:
            return 0
        stmt = delete(comments_table).where(_c.id.in_(list(comment_ids)))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def count(
        self,
        is_approved: Optional[bool] = None,
        is_reported: Optional[bool] = None,
        replies_only: bool = False,
        content_type: Optional[ContentType] = None,
    ) -> int:
        """Count comments matching every given filter."""
        stmt = select(func.count()).select_from(comments_table)

        if is_approved is not None:
            stmt = stmt.where(_c.is_approved == is_approved)
        if is_reported is not None:
            stmt = stmt.where(_c.is_reported == is_reported)
        if replies_only:
            stmt = stmt.where(_c.level > 0)
        if content_type is not None:
            stmt = stmt.where(_c.content_type == content_type.value)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def top_commenters(self, limit: int = 10) -> List[TopCommenter]:
        """Rank authors by approved comment count."""
        comment_count = func.count().label("comment_count")
        # Most recent snapshot of the author's name
        latest_name = func.array_agg(
            aggregate_order_by(_c.author_name, _c.created_at.desc())
        )[1].label("name")

        stmt = (
            select(_c.author_user_id, latest_name, comment_count)
            .where(_c.is_approved.is_(true()))
            .group_by(_c.author_user_id)
            .order_by(desc(comment_count), asc(_c.author_user_id))
            .limit(limit)
        )

        result = await self.session.execute(stmt)
        return [
            TopCommenter(
                user_id=UserId(row["author_user_id"]),
                name=row["name"],
                comment_count=row["comment_count"],
            )
            for row in result.mappings().all()
        ]
