"""Toggle reaction use case."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import ReactionService
from remark.domain.value import CommentId, ReactionAction, UserId


class ToggleReactionRequest(BaseModel):
    """Toggle reaction request."""

    comment_id: str
    user_id: str  # From authenticated user
    kind: Literal["like", "dislike"]


class ToggleReactionResponse(BaseModel):
    """Toggle reaction response."""

    comment_id: str
    likes: int
    dislikes: int
    user_action: ReactionAction


class ToggleReactionUseCase(BaseUseCase):
    """Use case for liking or disliking a comment.

    Repeating the same reaction takes it back.
    """

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize toggle reaction use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(self, request: ToggleReactionRequest) -> ToggleReactionResponse:
        """Execute toggle flow.

        Args:
            request: Toggle reaction request

        Returns:
            New like/dislike counts and the action taken

        Raises:
            NotFoundError: If comment not found
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        if request.kind == "like":
            result = await self.reaction_service.toggle_like(comment_id, user_id)
        else:
            result = await self.reaction_service.toggle_dislike(comment_id, user_id)

        return ToggleReactionResponse(
            comment_id=request.comment_id,
            likes=result.likes,
            dislikes=result.dislikes,
            user_action=result.user_action,
        )
