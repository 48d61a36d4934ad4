"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from remark.domain.model import Comment, EditRecord, Report
from remark.domain.value import (
    AuthorSnapshot,
    CommentId,
    ContentId,
    ContentType,
    UserId,
    UserProfile,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        content=row["content"],
        author=AuthorSnapshot(
            user_id=UserId(_uuid(row["author_user_id"])),
            name=row["author_name"],
            email=row["author_email"],
            photo=row.get("author_photo"),
        ),
        content_type=ContentType(row["content_type"]),
        content_id=ContentId(_uuid(row["content_id"])),
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        level=row["level"],
        replies=[CommentId(_uuid(r)) for r in row.get("replies") or []],
        likes=frozenset(UserId(_uuid(u)) for u in row.get("likes") or []),
        dislikes=frozenset(UserId(_uuid(u)) for u in row.get("dislikes") or []),
        is_approved=row["is_approved"],
        is_edited=row["is_edited"],
        edit_history=[EditRecord(**e) for e in row.get("edit_history") or []],
        is_reported=row["is_reported"],
        report_count=row["report_count"],
        reports=[Report(**r) for r in row.get("reports") or []],
        is_deleting=row.get("is_deleting", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def report_to_json(report: Report) -> Dict[str, Any]:
    """Convert a Report to the JSON object stored in the reports column."""
    return report.model_dump(mode="json")


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": comment.id,
        "content": comment.content,
        "author_user_id": comment.author.user_id,
        "author_name": comment.author.name,
        "author_email": comment.author.email,
        "author_photo": comment.author.photo,
        "content_type": comment.content_type.value,
        "content_id": comment.content_id,
        "parent_id": comment.parent_id,
        "level": comment.level,
        "replies": list(comment.replies),
        "likes": sorted(comment.likes, key=str),
        "dislikes": sorted(comment.dislikes, key=str),
        "is_approved": comment.is_approved,
        "is_edited": comment.is_edited,
        "edit_history": [e.model_dump(mode="json") for e in comment.edit_history],
        "is_reported": comment.is_reported,
        "report_count": comment.report_count,
        "reports": [report_to_json(r) for r in comment.reports],
        "is_deleting": comment.is_deleting,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def row_to_user_profile(row: Dict[str, Any]) -> UserProfile:
    """Convert database row to UserProfile value object.

    Args:
        row: Database row as dict

    Returns:
        UserProfile value object
    """
    return UserProfile(
        user_id=UserId(_uuid(row["id"])),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        photo=row.get("photo"),
    )
