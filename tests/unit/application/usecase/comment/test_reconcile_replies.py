"""Unit tests for ReconcileRepliesUseCase."""

from uuid import uuid4

import pytest

from remark.application.usecase.comment.reconcile_replies import (
    ReconcileRepliesRequest,
    ReconcileRepliesUseCase,
)
from remark.domain.error import ForbiddenError
from remark.domain.repository import CommentRepository
from remark.domain.value import ContentId
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestReconcileRepliesUseCase:
    """Tests for ReconcileRepliesUseCase."""

    @pytest.mark.asyncio
    async def test_admin_rebuilds_reply_list(self, unit_env):
        """An unlinked child is added back to the parent's replies."""
        # Arrange
        use_case = await unit_env.get(ReconcileRepliesUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        content_id = ContentId(uuid4())
        parent = make_comment(content_id)
        child = make_comment(content_id, parent_id=parent.id, level=1)
        await comment_repo.save(parent)
        await comment_repo.save(child)

        # Act
        response = await use_case.execute(
            ReconcileRepliesRequest(
                comment_id=str(parent.id), user_id=str(uuid4()), is_admin=True
            )
        )

        # Assert
        assert response.comment.replies == [str(child.id)]
        assert response.comment.reply_count == 1

    @pytest.mark.asyncio
    async def test_non_admin_is_forbidden(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ReconcileRepliesUseCase)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await use_case.execute(
                ReconcileRepliesRequest(comment_id=str(uuid4()), user_id=str(uuid4()))
            )
