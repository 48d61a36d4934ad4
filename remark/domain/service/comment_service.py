"""Comment domain service."""

from collections import deque
from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from remark.domain.error import (
    DepthExceededError,
    ForbiddenError,
    InvalidRelationError,
    NotFoundError,
    ValidationError,
)
from remark.domain.model.comment import MAX_COMMENT_LEVEL, Comment
from remark.domain.repository import (
    CommentRepository,
    ContentRepository,
    UserRepository,
)
from remark.domain.value import (
    CommentId,
    CommentText,
    ContentId,
    ContentType,
    UserId,
)

from .base import Service


def parse_content(content: str) -> str:
    """Normalize a comment body or raise a domain ValidationError."""
    try:
        return CommentText(content).root
    except PydanticValidationError as e:
        raise ValidationError(e.errors()[0]["msg"]) from e


class CommentService(Service):
    """Domain service for the comment tree.

    Owns the tree-shape invariants: depth bound, parent linkage and
    reply-list membership.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_repository: ContentRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            content_repository: Tutorial/course catalog
            user_repository: User directory
        """
        self.comment_repository = comment_repository
        self.content_repository = content_repository
        self.user_repository = user_repository

    async def create_comment(
        self,
        content_type: ContentType,
        content_id: ContentId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a tutorial/course or reply to another comment.

        Args:
            content_type: Tutorial or course
            content_id: Tutorial or course ID
            author_id: Author user ID
            content: Comment body
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If the body is empty or too long
            NotFoundError: If content, author or parent doesn't exist
            InvalidRelationError: If parent belongs to other content
            DepthExceededError: If the reply would be nested too deep
        """
        with logfire.span(
            "comment_service.create_comment",
            content_type=content_type.value,
            content_id=str(content_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            body = parse_content(content)

            if not await self.content_repository.exists(content_type, content_id):
                logfire.warn(
                    "Comment on non-existent content",
                    content_type=content_type.value,
                    content_id=str(content_id),
                )
                raise NotFoundError(content_type.value.capitalize(), str(content_id))

            profile = await self.user_repository.get_profile(author_id)
            if not profile:
                logfire.warn("Comment author not found", author_id=str(author_id))
                raise NotFoundError("User", str(author_id))

            # Level is always derived from the stored parent
            level = 0
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent or parent.is_deleting:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        content_id=str(content_id),
                    )
                    raise NotFoundError("Parent comment", str(parent_id))
                if parent.content_id != content_id:
                    logfire.warn(
                        "Parent comment does not belong to content",
                        parent_id=str(parent_id),
                        parent_content_id=str(parent.content_id),
                        target_content_id=str(content_id),
                    )
                    raise InvalidRelationError(str(parent_id), str(content_id))
                level = parent.level + 1
                if level > MAX_COMMENT_LEVEL:
                    logfire.warn(
                        "Maximum nesting level reached",
                        parent_id=str(parent_id),
                        parent_level=parent.level,
                    )
                    raise DepthExceededError(str(parent_id), MAX_COMMENT_LEVEL)

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                content=body,
                author=profile.to_snapshot(),
                content_type=content_type,
                content_id=content_id,
                parent_id=parent_id,
                level=level,
                created_at=now,
                updated_at=now,
            )

            if parent_id:
                saved = await self.comment_repository.add_reply(comment)
                if saved is None:
                    # Parent vanished or started deleting after our read
                    logfire.warn(
                        "Parent comment removed before reply was linked",
                        parent_id=str(parent_id),
                    )
                    raise NotFoundError("Parent comment", str(parent_id))
            else:
                saved = await self.comment_repository.save(comment)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                content_id=str(content_id),
                author_id=str(author_id),
                level=level,
            )
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def update_comment(
        self, comment_id: CommentId, content: str, user_id: UserId
    ) -> Comment:
        """Replace the body of a comment.

        Only the original author may edit. Level, parent and replies are
        never touched.

        Args:
            comment_id: Comment ID
            content: New body
            user_id: Caller user ID

        Returns:
            Updated comment

        Raises:
            ValidationError: If the body is empty or too long
            NotFoundError: If comment not found
            ForbiddenError: If caller is not the author
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            body = parse_content(content)
            comment = await self.get_comment(comment_id)

            if not comment.is_authored_by(user_id):
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
                raise ForbiddenError("edit", str(comment_id), str(user_id))

            updated = await self.comment_repository.update_content(
                comment_id, body, datetime.now()
            )
            if updated is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment updated",
                comment_id=str(comment_id),
                edits=len(updated.edit_history),
                text_length=len(body),
            )
            return updated

    async def delete_comment(
        self, comment_id: CommentId, user_id: UserId, is_admin: bool = False
    ) -> int:
        """Delete a comment together with its whole reply subtree.

        Steps:
        1. Unlink the comment from its parent's replies
        2. Collect every descendant through parent -> children edges
        3. Mark the subtree as deleting so no reply can attach to it
        4. Delete every collected comment

        Args:
            comment_id: Comment ID
            user_id: Caller user ID
            is_admin: Whether the caller may delete any comment

        Returns:
            Number of comments removed (the comment plus its descendants)

        Raises:
            NotFoundError: If comment not found
            ForbiddenError: If caller is neither author nor admin
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
            is_admin=is_admin,
        ):
            comment = await self.get_comment(comment_id)

            if not is_admin and not comment.is_authored_by(user_id):
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
                raise ForbiddenError("delete", str(comment_id), str(user_id))

            if comment.parent_id:
                await self.comment_repository.remove_reply(
                    comment.parent_id, comment.id
                )

            subtree = await self._collect_subtree(comment.id)
            await self.comment_repository.mark_deleting(subtree)
            deleted = await self.comment_repository.delete_many(subtree)

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                descendants=len(subtree) - 1,
                deleted=deleted,
            )
            return deleted

    async def reconcile_replies(self, comment_id: CommentId) -> Comment:
        """Rebuild a comment's replies list from its children's back-references.

        Repairs the list after a partial failure: missing child ids are
        added, ids of comments that no longer point here are dropped.

        Args:
            comment_id: Comment ID

        Returns:
            Comment with a consistent replies list

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span(
            "comment_service.reconcile_replies", comment_id=str(comment_id)
        ):
            comment = await self.get_comment(comment_id)
            children = await self.comment_repository.find_children(comment_id)
            expected = [child.id for child in children]

            if expected == comment.replies:
                return comment

            missing = set(expected) - set(comment.replies)
            stale = set(comment.replies) - set(expected)
            logfire.warn(
                "Reply list out of sync, rebuilding",
                comment_id=str(comment_id),
                missing=[str(i) for i in missing],
                stale=[str(i) for i in stale],
            )

            updated = await self.comment_repository.set_replies(comment_id, expected)
            if updated is None:
                raise NotFoundError("Comment", str(comment_id))
            return updated

    async def _collect_subtree(self, root_id: CommentId) -> list[CommentId]:
        """Collect a comment and all of its descendants, root first."""
        collected: list[CommentId] = [root_id]
        seen = {root_id}
        queue = deque([root_id])

        while queue:
            current = queue.popleft()
            for child in await self.comment_repository.find_children(current):
                if child.id in seen:
                    logfire.error(
                        "Cycle detected in comment tree",
                        comment_id=str(child.id),
                        parent_id=str(current),
                    )
                    continue
                seen.add(child.id)
                collected.append(child.id)
                queue.append(child.id)

        return collected
