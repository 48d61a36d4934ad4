"""Test configuration and shared helpers."""

from datetime import datetime
from uuid import uuid4

from dishka import AsyncContainer

from remark.domain.model import Comment
from remark.domain.repository import ContentRepository, UserRepository
from remark.domain.value import (
    AuthorSnapshot,
    CommentId,
    ContentId,
    ContentType,
    UserId,
    UserProfile,
)


async def seed_tutorial(env: AsyncContainer, is_published: bool = True) -> ContentId:
    """Register a tutorial in the in-memory catalog."""
    content_repo = await env.get(ContentRepository)
    tutorial_id = ContentId(uuid4())
    content_repo.add_tutorial(tutorial_id, is_published=is_published)
    return tutorial_id


async def seed_course(env: AsyncContainer) -> ContentId:
    """Register a course in the in-memory catalog."""
    content_repo = await env.get(ContentRepository)
    course_id = ContentId(uuid4())
    content_repo.add_course(course_id)
    return course_id


async def seed_user(
    env: AsyncContainer,
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    email: str = "Ada@Example.com",
) -> UserId:
    """Register a user profile in the in-memory directory."""
    user_repo = await env.get(UserRepository)
    user_id = UserId(uuid4())
    user_repo.add(
        UserProfile(
            user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
        )
    )
    return user_id


def make_comment(
    content_id: ContentId,
    content: str = "A comment",
    author_id: UserId | None = None,
    parent_id: CommentId | None = None,
    level: int = 0,
    content_type: ContentType = ContentType.TUTORIAL,
    created_at: datetime | None = None,
    **overrides,
) -> Comment:
    """Build a comment directly, bypassing the service checks."""
    created_at = created_at or datetime.now()
    return Comment(
        id=CommentId(uuid4()),
        content=content,
        author=AuthorSnapshot(
            user_id=author_id or UserId(uuid4()),
            name="Test Author",
            email="author@example.com",
        ),
        content_type=content_type,
        content_id=content_id,
        parent_id=parent_id,
        level=level,
        created_at=created_at,
        updated_at=created_at,
        **overrides,
    )
