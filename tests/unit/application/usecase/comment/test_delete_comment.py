"""Unit tests for DeleteCommentUseCase."""

from uuid import uuid4

import pytest

from remark.application.usecase.comment.delete_comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from remark.domain.error import ForbiddenError
from remark.domain.repository import CommentRepository
from remark.domain.value import ContentId, UserId
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    async def _thread(self, env, author_id):
        comment_repo = await env.get(CommentRepository)
        content_id = ContentId(uuid4())
        root = make_comment(content_id, author_id=author_id)
        await comment_repo.save(root)
        reply = make_comment(content_id, parent_id=root.id, level=1)
        await comment_repo.add_reply(reply)
        return root, reply

    @pytest.mark.asyncio
    async def test_author_deletes_comment_and_replies(self, unit_env):
        """Deleted count includes every descendant."""
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        root, reply = await self._thread(unit_env, author_id)

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(comment_id=str(root.id), user_id=str(author_id))
        )

        # Assert
        assert response.comment_id == str(root.id)
        assert response.deleted_count == 2
        assert await comment_repo.find_by_id(reply.id) is None

    @pytest.mark.asyncio
    async def test_admin_deletes_someone_elses_comment(self, unit_env):
        """is_admin lifts the authorship requirement."""
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        root, _ = await self._thread(unit_env, UserId(uuid4()))

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(
                comment_id=str(root.id), user_id=str(uuid4()), is_admin=True
            )
        )

        # Assert
        assert response.deleted_count == 2

    @pytest.mark.asyncio
    async def test_stranger_cannot_delete(self, unit_env):
        """Non-author, non-admin callers get ForbiddenError."""
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        root, _ = await self._thread(unit_env, UserId(uuid4()))

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await use_case.execute(
                DeleteCommentRequest(comment_id=str(root.id), user_id=str(uuid4()))
            )
