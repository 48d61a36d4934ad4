"""Unit tests for ThreadService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from remark.domain.error import NotFoundError, ValidationError
from remark.domain.repository import CommentRepository
from remark.domain.service import ThreadService
from remark.domain.value import (
    CommentId,
    ContentType,
    SortField,
    SortOrder,
    UserId,
)
from tests.conftest import make_comment, seed_course, seed_tutorial
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def _at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


def _users(count: int) -> frozenset[UserId]:
    return frozenset(UserId(uuid4()) for _ in range(count))


class TestGetCommentsByContent:
    """Tests for get_comments_by_content method."""

    @pytest.mark.asyncio
    async def test_default_sort_is_newest_first(self, unit_env):
        """Without arguments top-level comments come newest first."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        tutorial_id = await seed_tutorial(unit_env)
        old = make_comment(tutorial_id, "old", created_at=_at(0))
        new = make_comment(tutorial_id, "new", created_at=_at(10))
        await comment_repo.save(old)
        await comment_repo.save(new)

        # Act
        result = await thread_service.get_comments_by_content(tutorial_id)

        # Assert
        assert [n.comment.id for n in result.comments] == [new.id, old.id]
        assert result.pagination.limit == 20
        assert result.pagination.total_comments == 2

    @pytest.mark.asyncio
    async def test_sort_by_likes_descending(self, unit_env):
        """Sorting by likes uses the like count."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        tutorial_id = await seed_tutorial(unit_env)
        popular = make_comment(tutorial_id, created_at=_at(0), likes=_users(3))
        quiet = make_comment(tutorial_id, created_at=_at(1), likes=_users(1))
        ignored = make_comment(tutorial_id, created_at=_at(2))
        for comment in (quiet, ignored, popular):
            await comment_repo.save(comment)

        # Act
        result = await thread_service.get_comments_by_content(
            tutorial_id, sort_by=SortField.LIKES, sort_order=SortOrder.DESC
        )

        # Assert
        assert [n.comment.id for n in result.comments] == [
            popular.id,
            quiet.id,
            ignored.id,
        ]

    @pytest.mark.asyncio
    async def test_sort_by_replies_ascending(self, unit_env):
        """Sorting by replies uses the length of the replies list."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        tutorial_id = await seed_tutorial(unit_env)
        busy = make_comment(tutorial_id, created_at=_at(0))
        lonely = make_comment(tutorial_id, created_at=_at(1))
        await comment_repo.save(busy)
        await comment_repo.save(lonely)
        for i in range(2):
            await comment_repo.add_reply(
                make_comment(
                    tutorial_id, parent_id=busy.id, level=1, created_at=_at(5 + i)
                )
            )

        # Act
        result = await thread_service.get_comments_by_content(
            tutorial_id, sort_by=SortField.REPLIES, sort_order=SortOrder.ASC
        )

        # Assert
        assert [n.comment.id for n in result.comments] == [lonely.id, busy.id]

    @pytest.mark.asyncio
    async def test_pagination_metadata(self, unit_env):
        """Five comments with limit 2 give three pages."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        tutorial_id = await seed_tutorial(unit_env)
        comments = [make_comment(tutorial_id, created_at=_at(i)) for i in range(5)]
        for comment in comments:
            await comment_repo.save(comment)

        # Act
        result = await thread_service.get_comments_by_content(
            tutorial_id, page=2, limit=2, sort_order=SortOrder.ASC
        )

        # Assert
        assert [n.comment.id for n in result.comments] == [
            comments[2].id,
            comments[3].id,
        ]
        assert result.pagination.current_page == 2
        assert result.pagination.total_pages == 3
        assert result.pagination.total_comments == 5
        assert result.pagination.has_next is True
        assert result.pagination.has_prev is True

    @pytest.mark.asyncio
    async def test_empty_thread(self, unit_env):
        """A content item without comments gives an empty first page."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        tutorial_id = await seed_tutorial(unit_env)

        # Act
        result = await thread_service.get_comments_by_content(tutorial_id)

        # Assert
        assert result.comments == []
        assert result.pagination.total_pages == 0
        assert result.pagination.has_next is False
        assert result.pagination.has_prev is False

    @pytest.mark.asyncio
    async def test_nests_three_levels_of_replies_oldest_first(self, unit_env):
        """Replies are attached under their parents down to level 3."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        tutorial_id = await seed_tutorial(unit_env)

        root = make_comment(tutorial_id, created_at=_at(0))
        await comment_repo.save(root)
        late = make_comment(tutorial_id, parent_id=root.id, level=1, created_at=_at(9))
        early = make_comment(
            tutorial_id, parent_id=root.id, level=1, created_at=_at(1)
        )
        await comment_repo.add_reply(late)
        await comment_repo.add_reply(early)
        level_two = make_comment(
            tutorial_id, parent_id=early.id, level=2, created_at=_at(2)
        )
        await comment_repo.add_reply(level_two)
        level_three = make_comment(
            tutorial_id, parent_id=level_two.id, level=3, created_at=_at(3)
        )
        await comment_repo.add_reply(level_three)

        # Act
        result = await thread_service.get_comments_by_content(tutorial_id)

        # Assert
        assert len(result.comments) == 1
        root_node = result.comments[0]
        assert [n.comment.id for n in root_node.replies] == [early.id, late.id]
        early_node = root_node.replies[0]
        assert [n.comment.id for n in early_node.replies] == [level_two.id]
        assert [n.comment.id for n in early_node.replies[0].replies] == [
            level_three.id
        ]
        assert early_node.replies[0].replies[0].replies == []

    @pytest.mark.asyncio
    async def test_unapproved_comments_are_hidden(self, unit_env):
        """Rejected comments and rejected replies are left out."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        tutorial_id = await seed_tutorial(unit_env)

        visible = make_comment(tutorial_id, created_at=_at(0))
        hidden = make_comment(tutorial_id, created_at=_at(1), is_approved=False)
        await comment_repo.save(visible)
        await comment_repo.save(hidden)
        hidden_reply = make_comment(
            tutorial_id,
            parent_id=visible.id,
            level=1,
            created_at=_at(2),
            is_approved=False,
        )
        await comment_repo.add_reply(hidden_reply)

        # Act
        result = await thread_service.get_comments_by_content(tutorial_id)

        # Assert
        assert [n.comment.id for n in result.comments] == [visible.id]
        assert result.comments[0].replies == []
        assert result.pagination.total_comments == 1

    @pytest.mark.asyncio
    async def test_filters_by_content_type(self, unit_env):
        """The optional content type narrows the listing."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        course_id = await seed_course(unit_env)
        course_comment = make_comment(course_id, content_type=ContentType.COURSE)
        await comment_repo.save(course_comment)

        # Act
        as_course = await thread_service.get_comments_by_content(
            course_id, content_type=ContentType.COURSE
        )
        as_tutorial = await thread_service.get_comments_by_content(
            course_id, content_type=ContentType.TUTORIAL
        )

        # Assert
        assert [n.comment.id for n in as_course.comments] == [course_comment.id]
        assert as_tutorial.comments == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, 51), (-1, 10)])
    async def test_invalid_paging_raises(self, unit_env, page, limit):
        """Page must be at least 1 and limit between 1 and 50."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        tutorial_id = await seed_tutorial(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError):
            await thread_service.get_comments_by_content(
                tutorial_id, page=page, limit=limit
            )


class TestGetCommentReplies:
    """Tests for get_comment_replies method."""

    @pytest.mark.asyncio
    async def test_returns_approved_replies_oldest_first(self, unit_env):
        """Flat listing of direct replies in creation order."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        tutorial_id = await seed_tutorial(unit_env)
        parent = make_comment(tutorial_id, created_at=_at(0))
        await comment_repo.save(parent)
        replies = [
            make_comment(
                tutorial_id, parent_id=parent.id, level=1, created_at=_at(10 - i)
            )
            for i in range(3)
        ]
        for reply in replies:
            await comment_repo.add_reply(reply)
        rejected = make_comment(
            tutorial_id,
            parent_id=parent.id,
            level=1,
            created_at=_at(20),
            is_approved=False,
        )
        await comment_repo.add_reply(rejected)

        # Act
        result = await thread_service.get_comment_replies(parent.id)

        # Assert
        assert [r.id for r in result.replies] == [r.id for r in reversed(replies)]
        assert result.pagination.limit == 10
        assert result.pagination.total_comments == 3

    @pytest.mark.asyncio
    async def test_replies_are_paginated(self, unit_env):
        """Second page holds the remaining replies."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        tutorial_id = await seed_tutorial(unit_env)
        parent = make_comment(tutorial_id, created_at=_at(0))
        await comment_repo.save(parent)
        replies = [
            make_comment(tutorial_id, parent_id=parent.id, level=1, created_at=_at(i))
            for i in range(1, 4)
        ]
        for reply in replies:
            await comment_repo.add_reply(reply)

        # Act
        result = await thread_service.get_comment_replies(parent.id, page=2, limit=2)

        # Assert
        assert [r.id for r in result.replies] == [replies[2].id]
        assert result.pagination.total_pages == 2
        assert result.pagination.has_next is False
        assert result.pagination.has_prev is True

    @pytest.mark.asyncio
    async def test_missing_parent_raises(self, unit_env):
        """Listing replies of an unknown comment should raise NotFoundError."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await thread_service.get_comment_replies(CommentId(uuid4()))


class TestGetCommentStats:
    """Tests for get_comment_stats method."""

    @pytest.mark.asyncio
    async def test_counters_and_average(self, unit_env):
        """Counters cover every comment, the average only tutorial ones."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        first = await seed_tutorial(unit_env)
        await seed_tutorial(unit_env)
        await seed_tutorial(unit_env)
        await seed_tutorial(unit_env, is_published=False)
        course_id = await seed_course(unit_env)

        author = UserId(uuid4())
        root = make_comment(first, author_id=author, created_at=_at(0))
        await comment_repo.save(root)
        await comment_repo.add_reply(
            make_comment(first, parent_id=root.id, level=1, created_at=_at(1))
        )
        await comment_repo.save(
            make_comment(first, is_approved=False, created_at=_at(2))
        )
        await comment_repo.save(
            make_comment(
                first,
                author_id=author,
                is_reported=True,
                report_count=1,
                created_at=_at(3),
            )
        )
        await comment_repo.save(
            make_comment(
                course_id, content_type=ContentType.COURSE, created_at=_at(4)
            )
        )

        # Act
        stats = await thread_service.get_comment_stats()

        # Assert
        assert stats.total_comments == 5
        assert stats.approved_comments == 4
        assert stats.pending_comments == 1
        assert stats.reported_comments == 1
        assert stats.total_replies == 1
        # 4 tutorial comments over 3 published tutorials
        assert stats.average_comments_per_tutorial == 1.33
        assert stats.top_commenters[0].user_id == author
        assert stats.top_commenters[0].comment_count == 2

    @pytest.mark.asyncio
    async def test_average_is_zero_without_published_tutorials(self, unit_env):
        """No published tutorials means an average of 0."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        draft = await seed_tutorial(unit_env, is_published=False)
        await comment_repo.save(make_comment(draft))

        # Act
        stats = await thread_service.get_comment_stats()

        # Assert
        assert stats.total_comments == 1
        assert stats.average_comments_per_tutorial == 0

    @pytest.mark.asyncio
    async def test_top_commenters_ranked_by_approved_comments(self, unit_env):
        """Authors are ordered by approved comment count."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        comment_repo = await unit_env.get(CommentRepository)
        tutorial_id = await seed_tutorial(unit_env)
        prolific, casual = UserId(uuid4()), UserId(uuid4())
        for i in range(3):
            await comment_repo.save(
                make_comment(tutorial_id, author_id=prolific, created_at=_at(i))
            )
        await comment_repo.save(
            make_comment(tutorial_id, author_id=casual, created_at=_at(5))
        )
        for i in range(4):
            await comment_repo.save(
                make_comment(
                    tutorial_id,
                    author_id=casual,
                    is_approved=False,
                    created_at=_at(10 + i),
                )
            )

        # Act
        stats = await thread_service.get_comment_stats()

        # Assert
        assert [(t.user_id, t.comment_count) for t in stats.top_commenters] == [
            (prolific, 3),
            (casual, 1),
        ]
        assert stats.top_commenters[0].name == "Test Author"
