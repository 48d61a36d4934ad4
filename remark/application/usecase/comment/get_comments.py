"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.application.usecase.views import CommentNodeItem, PaginationItem
from remark.domain.service import ThreadService
from remark.domain.value import ContentId, ContentType, SortField, SortOrder


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    content_id: str  # UUID string
    page: int = 1
    limit: int | None = None
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    content_type: ContentType | None = None


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    content_id: str
    comments: list[CommentNodeItem]
    pagination: PaginationItem


class GetCommentsUseCase(BaseUseCase):
    """Use case for reading a page of a tutorial's or course's discussion."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize get comments use case.

        Args:
            thread_service: Thread read service
        """
        self.thread_service = thread_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Top-level comments come back sorted as requested, each carrying up
        to three levels of approved replies, oldest first.

        Args:
            request: Get comments request

        Returns:
            Comment trees with pagination metadata

        Raises:
            ValidationError: If page or limit is out of range
        """
        thread = await self.thread_service.get_comments_by_content(
            content_id=ContentId(UUID(request.content_id)),
            page=request.page,
            limit=request.limit,
            sort_by=request.sort_by,
            sort_order=request.sort_order,
            content_type=request.content_type,
        )
        return GetCommentsResponse(
            content_id=request.content_id,
            comments=[CommentNodeItem.from_node(node) for node in thread.comments],
            pagination=PaginationItem.from_pagination(thread.pagination),
        )
