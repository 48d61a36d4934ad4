"""Domain value objects for Remark."""

from remark.domain.value.identifiers import CommentId, ContentId, UserId
from remark.domain.value.types import (
    AuthorSnapshot,
    CallerIdentity,
    CommentText,
    ContentType,
    ModerationAction,
    ReactionAction,
    ReportReason,
    SortField,
    SortOrder,
    UserProfile,
)

__all__ = [
    # Identifiers
    "CommentId",
    "ContentId",
    "UserId",
    # Types
    "AuthorSnapshot",
    "CallerIdentity",
    "CommentText",
    "ContentType",
    "ModerationAction",
    "ReactionAction",
    "ReportReason",
    "SortField",
    "SortOrder",
    "UserProfile",
]
