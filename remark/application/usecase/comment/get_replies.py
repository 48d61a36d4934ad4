"""Get replies use case."""

from uuid import UUID

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.application.usecase.views import CommentItem, PaginationItem
from remark.domain.service import ThreadService
from remark.domain.value import CommentId


class GetRepliesRequest(BaseModel):
    """Get replies request."""

    comment_id: str
    page: int = 1
    limit: int | None = None


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    comment_id: str
    replies: list[CommentItem]
    pagination: PaginationItem


class GetRepliesUseCase(BaseUseCase):
    """Use case for paging through the direct replies of a comment."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow.

        Raises:
            NotFoundError: If the parent comment doesn't exist
            ValidationError: If page or limit is out of range
        """
        page = await self.thread_service.get_comment_replies(
            parent_id=CommentId(UUID(request.comment_id)),
            page=request.page,
            limit=request.limit,
        )
        return GetRepliesResponse(
            comment_id=request.comment_id,
            replies=[CommentItem.from_comment(reply) for reply in page.replies],
            pagination=PaginationItem.from_pagination(page.pagination),
        )
