"""Report comment use case."""

from uuid import UUID

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import ModerationService
from remark.domain.value import CommentId, UserId


class ReportCommentRequest(BaseModel):
    """Report comment request."""

    comment_id: str
    user_id: str  # From authenticated user
    reason: str
    description: str | None = None


class ReportCommentResponse(BaseModel):
    """Report comment response."""

    comment_id: str
    is_reported: bool
    report_count: int


class ReportCommentUseCase(BaseUseCase):
    """Use case for flagging a comment for moderation."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize report comment use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: ReportCommentRequest) -> ReportCommentResponse:
        """Execute report flow.

        Args:
            request: Report comment request

        Returns:
            The comment's report state after this report

        Raises:
            ValidationError: If reason or description is invalid
            NotFoundError: If comment not found
            AlreadyReportedError: If user already reported this comment
        """
        comment = await self.moderation_service.report_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            user_id=UserId(UUID(request.user_id)),
            reason=request.reason,
            description=request.description,
        )
        return ReportCommentResponse(
            comment_id=str(comment.id),
            is_reported=comment.is_reported,
            report_count=comment.report_count,
        )
