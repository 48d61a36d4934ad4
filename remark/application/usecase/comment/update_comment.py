"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.application.usecase.views import CommentItem
from remark.domain.service import CommentService
from remark.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    user_id: str  # From authenticated user
    content: str


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's body."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Only the author can edit. The previous body is kept in the
        comment's edit history.

        Args:
            request: Update comment request

        Returns:
            The updated comment

        Raises:
            NotFoundError: If comment not found
            ForbiddenError: If user is not the author
            ValidationError: If the new body is empty or too long
        """
        comment = await self.comment_service.update_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            content=request.content,
            user_id=UserId(UUID(request.user_id)),
        )
        return UpdateCommentResponse(comment=CommentItem.from_comment(comment))
