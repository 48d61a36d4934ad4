"""Get comment use case."""

from uuid import UUID

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.application.usecase.views import CommentItem
from remark.domain.service import CommentService
from remark.domain.value import CommentId


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str


class GetCommentResponse(BaseModel):
    """Get comment response."""

    comment: CommentItem


class GetCommentUseCase(BaseUseCase):
    """Use case for fetching a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        comment = await self.comment_service.get_comment(
            CommentId(UUID(request.comment_id))
        )
        return GetCommentResponse(comment=CommentItem.from_comment(comment))
