"""Moderate comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.application.usecase.views import CommentItem
from remark.domain.error import ForbiddenError
from remark.domain.service import ModerationService
from remark.domain.value import CommentId, UserId


class ModerateCommentRequest(BaseModel):
    """Moderate comment request."""

    comment_id: str
    moderator_id: str  # From authenticated user
    is_admin: bool = False
    action: str
    reason: str | None = None


class ModerateCommentResponse(BaseModel):
    """Moderate comment response.

    ``comment`` is None when the action deleted it.
    """

    comment_id: str
    action: str
    comment: CommentItem | None


class ModerateCommentUseCase(BaseUseCase):
    """Admin use case for approving, rejecting, deleting or restoring."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize moderate comment use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: ModerateCommentRequest) -> ModerateCommentResponse:
        """Execute moderation flow.

        Args:
            request: Moderate comment request

        Returns:
            The moderated comment, or None for deletes

        Raises:
            ForbiddenError: If user is not an admin
            InvalidActionError: If the action is unknown
            NotFoundError: If comment not found
        """
        if not request.is_admin:
            logfire.warn(
                "Non-admin moderation attempt",
                comment_id=request.comment_id,
                user_id=request.moderator_id,
            )
            raise ForbiddenError("moderate", request.comment_id, request.moderator_id)

        comment = await self.moderation_service.moderate_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            action=request.action,
            moderator_id=UserId(UUID(request.moderator_id)),
            reason=request.reason,
        )
        return ModerateCommentResponse(
            comment_id=request.comment_id,
            action=request.action,
            comment=CommentItem.from_comment(comment) if comment else None,
        )
