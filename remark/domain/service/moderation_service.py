"""Moderation domain service."""

from datetime import datetime

import logfire

from remark.domain.error import (
    AlreadyReportedError,
    InvalidActionError,
    NotFoundError,
    ValidationError,
)
from remark.domain.model.comment import Comment, Report
from remark.domain.repository import CommentRepository
from remark.domain.value import CommentId, ModerationAction, ReportReason, UserId
from remark.domain.value.types import MAX_REPORT_DESCRIPTION_LENGTH

from .base import Service
from .comment_service import CommentService


class ModerationService(Service):
    """Domain service for reporting and moderating comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize moderation service.

        Args:
            comment_repository: Comment repository
            comment_service: Comment domain service (cascading delete)
        """
        self.comment_repository = comment_repository
        self.comment_service = comment_service

    async def report_comment(
        self,
        comment_id: CommentId,
        user_id: UserId,
        reason: ReportReason | str,
        description: str | None = None,
    ) -> Comment:
        """Report a comment.

        A user can report a given comment only once. The duplicate check and
        the append happen in the same store operation.

        Args:
            comment_id: Comment ID
            user_id: Reporting user ID
            reason: One of spam, inappropriate, offensive, harassment, other
            description: Optional free text (max 500 characters)

        Returns:
            The reported comment

        Raises:
            ValidationError: If reason or description is invalid
            NotFoundError: If comment not found
            AlreadyReportedError: If this user already reported it
        """
        with logfire.span(
            "moderation_service.report_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            try:
                reason = ReportReason(reason)
            except ValueError:
                raise ValidationError(
                    "Reason must be one of: "
                    + ", ".join(r.value for r in ReportReason)
                )

            if description is not None:
                description = description.strip() or None
            if description and len(description) > MAX_REPORT_DESCRIPTION_LENGTH:
                raise ValidationError(
                    f"Description must not exceed {MAX_REPORT_DESCRIPTION_LENGTH} characters"
                )

            report = Report(
                user_id=user_id,
                reason=reason,
                description=description,
                reported_at=datetime.now(),
            )
            updated = await self.comment_repository.add_report(comment_id, report)

            if updated is None:
                # Either the comment is gone or the conditional append refused
                existing = await self.comment_repository.find_by_id(comment_id)
                if existing is None:
                    logfire.warn(
                        "Report on non-existent comment", comment_id=str(comment_id)
                    )
                    raise NotFoundError("Comment", str(comment_id))
                logfire.warn(
                    "Duplicate report attempt",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
                raise AlreadyReportedError(str(comment_id), str(user_id))

            logfire.info(
                "Comment reported",
                comment_id=str(comment_id),
                user_id=str(user_id),
                reason=reason.value,
                report_count=updated.report_count,
            )
            return updated

    async def moderate_comment(
        self,
        comment_id: CommentId,
        action: ModerationAction | str,
        moderator_id: UserId,
        reason: str | None = None,
    ) -> Comment | None:
        """Apply a moderation action to a comment.

        - approve: make the comment visible
        - reject: hide the comment
        - delete: cascading delete with admin rights
        - restore: make visible and clear every report

        Args:
            comment_id: Comment ID
            action: Moderation action
            moderator_id: Moderator user ID
            reason: Optional note, recorded in the logs

        Returns:
            Updated comment, or None when the action was delete

        Raises:
            InvalidActionError: If the action is unknown
            NotFoundError: If comment not found
        """
        with logfire.span(
            "moderation_service.moderate_comment",
            comment_id=str(comment_id),
            action=str(getattr(action, "value", action)),
            moderator_id=str(moderator_id),
        ):
            try:
                action = ModerationAction(action)
            except ValueError:
                logfire.warn("Invalid moderation action", action=str(action))
                raise InvalidActionError(str(action))

            if action == ModerationAction.DELETE:
                await self.comment_service.delete_comment(
                    comment_id, moderator_id, is_admin=True
                )
                logfire.info(
                    "Comment moderated",
                    comment_id=str(comment_id),
                    action=action.value,
                    moderator_id=str(moderator_id),
                    reason=reason,
                )
                return None

            if action == ModerationAction.APPROVE:
                updated = await self.comment_repository.set_approval(comment_id, True)
            elif action == ModerationAction.REJECT:
                updated = await self.comment_repository.set_approval(comment_id, False)
            else:  # ModerationAction.RESTORE
                updated = await self.comment_repository.clear_reports(comment_id)

            if updated is None:
                logfire.warn(
                    "Moderation of non-existent comment", comment_id=str(comment_id)
                )
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment moderated",
                comment_id=str(comment_id),
                action=action.value,
                moderator_id=str(moderator_id),
                reason=reason,
                is_approved=updated.is_approved,
            )
            return updated
