"""Reconcile replies use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.application.usecase.views import CommentItem
from remark.domain.error import ForbiddenError
from remark.domain.service import CommentService
from remark.domain.value import CommentId


class ReconcileRepliesRequest(BaseModel):
    """Reconcile replies request."""

    comment_id: str
    user_id: str  # From authenticated user
    is_admin: bool = False


class ReconcileRepliesResponse(BaseModel):
    """Reconcile replies response."""

    comment: CommentItem


class ReconcileRepliesUseCase(BaseUseCase):
    """Admin use case for repairing a comment's reply list."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize reconcile replies use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(
        self, request: ReconcileRepliesRequest
    ) -> ReconcileRepliesResponse:
        """Execute reconcile flow.

        Args:
            request: Reconcile replies request

        Returns:
            The comment with a rebuilt replies list

        Raises:
            ForbiddenError: If user is not an admin
            NotFoundError: If comment not found
        """
        if not request.is_admin:
            logfire.warn(
                "Non-admin reconcile attempt",
                comment_id=request.comment_id,
                user_id=request.user_id,
            )
            raise ForbiddenError("reconcile", request.comment_id, request.user_id)

        comment = await self.comment_service.reconcile_replies(
            CommentId(UUID(request.comment_id))
        )
        return ReconcileRepliesResponse(comment=CommentItem.from_comment(comment))
