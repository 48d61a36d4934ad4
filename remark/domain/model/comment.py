"""Comment entity.

Comments form a depth-bounded tree attached to a tutorial or a course.
The tree lives in a flat store: every reply points at its parent through
``parent_id`` and every parent keeps the ordered ids of its children in
``replies``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from remark.domain.model.common import DomainModel
from remark.domain.value import (
    AuthorSnapshot,
    CommentId,
    ContentId,
    ContentType,
    ReportReason,
    UserId,
)
from remark.domain.value.types import (
    MAX_CONTENT_LENGTH,
    MAX_REPORT_DESCRIPTION_LENGTH,
)

MAX_COMMENT_LEVEL = 3


class EditRecord(DomainModel):
    """A previous version of a comment body.

    ``edited_at`` is when this version was replaced by the next edit, not
    when it was first written.
    """

    content: str
    edited_at: datetime = Field(default_factory=datetime.now)


class Report(DomainModel):
    """A single user's report against a comment."""

    user_id: UserId
    reason: ReportReason
    description: Optional[str] = Field(
        default=None, max_length=MAX_REPORT_DESCRIPTION_LENGTH
    )
    reported_at: datetime = Field(default_factory=datetime.now)


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - level: Nesting depth, 0 for top-level, at most 3
    - replies: Ids of direct children, oldest first

    Reactions are sets of user ids. A user can be in ``likes`` or in
    ``dislikes``, never in both.
    """

    id: CommentId
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    author: AuthorSnapshot
    content_type: ContentType
    content_id: ContentId
    parent_id: Optional[CommentId] = None
    level: int = Field(default=0, ge=0, le=MAX_COMMENT_LEVEL)
    replies: list[CommentId] = Field(default_factory=list)
    likes: frozenset[UserId] = frozenset()
    dislikes: frozenset[UserId] = frozenset()
    is_approved: bool = True
    is_edited: bool = False
    edit_history: list[EditRecord] = Field(default_factory=list)
    is_reported: bool = False
    report_count: int = Field(default=0, ge=0)
    reports: list[Report] = Field(default_factory=list)
    is_deleting: bool = False  # Set while a cascading delete is in progress
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_thread_shape(self) -> "Comment":
        """Validate level/parent consistency and reaction exclusivity."""
        if self.parent_id is None and self.level != 0:
            raise ValueError("Top-level comments must have level 0")
        if self.parent_id is not None and self.level == 0:
            raise ValueError("Replies must have a level greater than 0")
        if self.likes & self.dislikes:
            raise ValueError("A user cannot both like and dislike a comment")
        return self

    @property
    def like_count(self) -> int:
        return len(self.likes)

    @property
    def dislike_count(self) -> int:
        return len(self.dislikes)

    @property
    def reply_count(self) -> int:
        return len(self.replies)

    def is_authored_by(self, user_id: UserId) -> bool:
        """Check whether the given user wrote this comment."""
        return self.author.user_id == user_id

    def has_reported(self, user_id: UserId) -> bool:
        """Check whether the given user already reported this comment."""
        return any(report.user_id == user_id for report in self.reports)
