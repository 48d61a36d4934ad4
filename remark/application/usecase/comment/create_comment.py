"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.application.usecase.views import CommentItem
from remark.domain.service import CommentService
from remark.domain.value import CommentId, ContentId, ContentType, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content_type: ContentType
    content_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a tutorial/course or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            ValidationError: If the body is empty or too long
            NotFoundError: If content, author or parent doesn't exist
            InvalidRelationError: If the parent belongs to other content
            DepthExceededError: If the reply would nest too deep
        """
        comment = await self.comment_service.create_comment(
            content_type=request.content_type,
            content_id=ContentId(UUID(request.content_id)),
            author_id=UserId(UUID(request.author_id)),
            content=request.content,
            parent_id=CommentId(UUID(request.parent_id)) if request.parent_id else None,
        )
        return CreateCommentResponse(comment=CommentItem.from_comment(comment))
