"""Reaction domain service."""

from dataclasses import dataclass

import logfire

from remark.domain.error import NotFoundError
from remark.domain.repository import CommentRepository
from remark.domain.value import CommentId, ReactionAction, UserId

from .base import Service


@dataclass
class ReactionResult:
    """Outcome of a like/dislike toggle."""

    likes: int
    dislikes: int
    user_action: ReactionAction


class ReactionService(Service):
    """Domain service for like/dislike toggles.

    Each toggle is a single atomic update in the repository, so two
    concurrent toggles by the same user never both apply to stale state.
    """

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize reaction service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def toggle_like(self, comment_id: CommentId, user_id: UserId) -> ReactionResult:
        """Like a comment, or take the like back if already given.

        Liking clears any dislike by the same user.

        Args:
            comment_id: Comment ID
            user_id: Reacting user ID

        Returns:
            New like/dislike counts and which way the toggle went

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span(
            "reaction_service.toggle_like",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            updated = await self.comment_repository.toggle_like(comment_id, user_id)
            if updated is None:
                logfire.warn("Like on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            action = (
                ReactionAction.LIKED
                if user_id in updated.likes
                else ReactionAction.UNLIKED
            )
            logfire.info(
                "Comment like toggled",
                comment_id=str(comment_id),
                user_id=str(user_id),
                action=action.value,
                likes=updated.like_count,
            )
            return ReactionResult(
                likes=updated.like_count,
                dislikes=updated.dislike_count,
                user_action=action,
            )

    async def toggle_dislike(
        self, comment_id: CommentId, user_id: UserId
    ) -> ReactionResult:
        """Dislike a comment, or take the dislike back if already given.

        Disliking clears any like by the same user.

        Args:
            comment_id: Comment ID
            user_id: Reacting user ID

        Returns:
            New like/dislike counts and which way the toggle went

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span(
            "reaction_service.toggle_dislike",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            updated = await self.comment_repository.toggle_dislike(comment_id, user_id)
            if updated is None:
                logfire.warn(
                    "Dislike on non-existent comment", comment_id=str(comment_id)
                )
                raise NotFoundError("Comment", str(comment_id))

            action = (
                ReactionAction.DISLIKED
                if user_id in updated.dislikes
                else ReactionAction.UNDISLIKED
            )
            logfire.info(
                "Comment dislike toggled",
                comment_id=str(comment_id),
                user_id=str(user_id),
                action=action.value,
                dislikes=updated.dislike_count,
            )
            return ReactionResult(
                likes=updated.like_count,
                dislikes=updated.dislike_count,
                user_action=action,
            )
