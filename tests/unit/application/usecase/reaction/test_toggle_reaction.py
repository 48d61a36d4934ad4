"""Unit tests for ToggleReactionUseCase."""

from uuid import uuid4

import pytest

from remark.application.usecase.reaction import (
    ToggleReactionRequest,
    ToggleReactionUseCase,
)
from remark.domain.error import NotFoundError
from remark.domain.repository import CommentRepository
from remark.domain.value import ContentId, ReactionAction
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestToggleReactionUseCase:
    """Tests for ToggleReactionUseCase."""

    @pytest.mark.asyncio
    async def test_like_then_switch_to_dislike(self, unit_env):
        """Counts move across when the user changes their mind."""
        # Arrange
        use_case = await unit_env.get(ToggleReactionUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        comment = make_comment(ContentId(uuid4()))
        await comment_repo.save(comment)
        user_id = str(uuid4())

        # Act
        liked = await use_case.execute(
            ToggleReactionRequest(
                comment_id=str(comment.id), user_id=user_id, kind="like"
            )
        )
        disliked = await use_case.execute(
            ToggleReactionRequest(
                comment_id=str(comment.id), user_id=user_id, kind="dislike"
            )
        )

        # Assert
        assert (liked.likes, liked.dislikes) == (1, 0)
        assert liked.user_action == ReactionAction.LIKED
        assert (disliked.likes, disliked.dislikes) == (0, 1)
        assert disliked.user_action == ReactionAction.DISLIKED
        assert disliked.comment_id == str(comment.id)

    @pytest.mark.asyncio
    async def test_repeat_like_is_undone(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ToggleReactionUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        comment = make_comment(ContentId(uuid4()))
        await comment_repo.save(comment)
        request = ToggleReactionRequest(
            comment_id=str(comment.id), user_id=str(uuid4()), kind="like"
        )

        # Act
        await use_case.execute(request)
        response = await use_case.execute(request)

        # Assert
        assert response.likes == 0
        assert response.user_action == ReactionAction.UNLIKED

    @pytest.mark.asyncio
    async def test_missing_comment_raises(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ToggleReactionUseCase)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                ToggleReactionRequest(
                    comment_id=str(uuid4()), user_id=str(uuid4()), kind="dislike"
                )
            )
