"""Unit tests for ReactionService."""

from uuid import uuid4

import pytest

from remark.domain.error import NotFoundError
from remark.domain.repository import CommentRepository
from remark.domain.service import ReactionService
from remark.domain.value import CommentId, ContentId, ReactionAction, UserId
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _stored_comment(env):
    comment_repo = await env.get(CommentRepository)
    comment = make_comment(ContentId(uuid4()))
    await comment_repo.save(comment)
    return comment


class TestToggleLike:
    """Tests for toggle_like method."""

    @pytest.mark.asyncio
    async def test_first_like_adds_user(self, unit_env):
        """Liking once records the user and reports 'liked'."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        comment = await _stored_comment(unit_env)
        user_id = UserId(uuid4())

        # Act
        result = await reaction_service.toggle_like(comment.id, user_id)

        # Assert
        assert result.likes == 1
        assert result.dislikes == 0
        assert result.user_action == ReactionAction.LIKED

    @pytest.mark.asyncio
    async def test_second_like_removes_it(self, unit_env):
        """Liking twice leaves the comment as it was."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _stored_comment(unit_env)
        user_id = UserId(uuid4())

        # Act
        await reaction_service.toggle_like(comment.id, user_id)
        result = await reaction_service.toggle_like(comment.id, user_id)

        # Assert
        assert result.likes == 0
        assert result.user_action == ReactionAction.UNLIKED
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.likes == frozenset()

    @pytest.mark.asyncio
    async def test_like_clears_existing_dislike(self, unit_env):
        """A user cannot hold a like and a dislike at the same time."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _stored_comment(unit_env)
        user_id = UserId(uuid4())
        await reaction_service.toggle_dislike(comment.id, user_id)

        # Act
        result = await reaction_service.toggle_like(comment.id, user_id)

        # Assert
        assert result.likes == 1
        assert result.dislikes == 0
        stored = await comment_repo.find_by_id(comment.id)
        assert user_id in stored.likes
        assert user_id not in stored.dislikes

    @pytest.mark.asyncio
    async def test_likes_from_different_users_accumulate(self, unit_env):
        """Each user contributes at most one like."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        comment = await _stored_comment(unit_env)

        # Act
        for _ in range(3):
            result = await reaction_service.toggle_like(comment.id, UserId(uuid4()))

        # Assert
        assert result.likes == 3

    @pytest.mark.asyncio
    async def test_like_missing_comment_raises(self, unit_env):
        """Liking an unknown comment should raise NotFoundError."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await reaction_service.toggle_like(CommentId(uuid4()), UserId(uuid4()))


class TestToggleDislike:
    """Tests for toggle_dislike method."""

    @pytest.mark.asyncio
    async def test_dislike_then_undo(self, unit_env):
        """Disliking twice reports 'disliked' then 'undisliked'."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        comment = await _stored_comment(unit_env)
        user_id = UserId(uuid4())

        # Act
        first = await reaction_service.toggle_dislike(comment.id, user_id)
        second = await reaction_service.toggle_dislike(comment.id, user_id)

        # Assert
        assert first.dislikes == 1
        assert first.user_action == ReactionAction.DISLIKED
        assert second.dislikes == 0
        assert second.user_action == ReactionAction.UNDISLIKED

    @pytest.mark.asyncio
    async def test_dislike_clears_existing_like(self, unit_env):
        """Switching from like to dislike moves the user across."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        comment = await _stored_comment(unit_env)
        user_id = UserId(uuid4())
        await reaction_service.toggle_like(comment.id, user_id)

        # Act
        result = await reaction_service.toggle_dislike(comment.id, user_id)

        # Assert
        assert result.likes == 0
        assert result.dislikes == 1
        assert result.user_action == ReactionAction.DISLIKED

    @pytest.mark.asyncio
    async def test_dislike_keeps_other_users_likes(self, unit_env):
        """Only the caller's own like is cleared."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        comment = await _stored_comment(unit_env)
        await reaction_service.toggle_like(comment.id, UserId(uuid4()))

        # Act
        result = await reaction_service.toggle_dislike(comment.id, UserId(uuid4()))

        # Assert
        assert result.likes == 1
        assert result.dislikes == 1

    @pytest.mark.asyncio
    async def test_dislike_missing_comment_raises(self, unit_env):
        """Disliking an unknown comment should raise NotFoundError."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await reaction_service.toggle_dislike(CommentId(uuid4()), UserId(uuid4()))
