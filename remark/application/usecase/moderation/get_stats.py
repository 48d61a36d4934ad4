"""Get comment statistics use case."""

import logfire
from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.error import ForbiddenError
from remark.domain.service import ThreadService


class GetCommentStatsRequest(BaseModel):
    """Get comment statistics request."""

    user_id: str  # From authenticated user
    is_admin: bool = False


class TopCommenterItem(BaseModel):
    """Top commenter in response."""

    user_id: str
    name: str
    comment_count: int


class GetCommentStatsResponse(BaseModel):
    """Get comment statistics response."""

    total_comments: int
    approved_comments: int
    pending_comments: int
    reported_comments: int
    total_replies: int
    average_comments_per_tutorial: float
    top_commenters: list[TopCommenterItem]


class GetCommentStatsUseCase(BaseUseCase):
    """Admin use case for the moderation dashboard counters."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: GetCommentStatsRequest) -> GetCommentStatsResponse:
        """Execute statistics flow.

        Raises:
            ForbiddenError: If user is not an admin
        """
        if not request.is_admin:
            logfire.warn("Non-admin statistics request", user_id=request.user_id)
            raise ForbiddenError("view", "statistics", request.user_id)

        stats = await self.thread_service.get_comment_stats()
        return GetCommentStatsResponse(
            total_comments=stats.total_comments,
            approved_comments=stats.approved_comments,
            pending_comments=stats.pending_comments,
            reported_comments=stats.reported_comments,
            total_replies=stats.total_replies,
            average_comments_per_tutorial=stats.average_comments_per_tutorial,
            top_commenters=[
                TopCommenterItem(
                    user_id=str(t.user_id), name=t.name, comment_count=t.comment_count
                )
                for t in stats.top_commenters
            ],
        )
