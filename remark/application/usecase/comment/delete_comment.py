"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import CommentService
from remark.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    user_id: str  # From authenticated user
    is_admin: bool = False


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    deleted_count: int  # The comment plus every descendant


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment and its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Args:
            request: Delete comment request

        Returns:
            How many comments were removed

        Raises:
            NotFoundError: If comment not found
            ForbiddenError: If user is neither the author nor an admin
        """
        deleted = await self.comment_service.delete_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            user_id=UserId(UUID(request.user_id)),
            is_admin=request.is_admin,
        )
        return DeleteCommentResponse(
            comment_id=request.comment_id, deleted_count=deleted
        )
