"""Domain value objects for Remark.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Optional

from pydantic import field_validator

from remark.domain.value.common import RootValueObject, ValueObject
from remark.domain.value.identifiers import UserId

MAX_CONTENT_LENGTH = 2000
MAX_REPORT_DESCRIPTION_LENGTH = 500


class ContentType(str, Enum):
    """Kind of content a comment thread is attached to."""

    TUTORIAL = "tutorial"
    COURSE = "course"


class ReportReason(str, Enum):
    """Reason given when reporting a comment."""

    SPAM = "spam"
    INAPPROPRIATE = "inappropriate"
    OFFENSIVE = "offensive"
    HARASSMENT = "harassment"
    OTHER = "other"


class ModerationAction(str, Enum):
    """Administrative transition applied to a comment."""

    APPROVE = "approve"
    REJECT = "reject"
    DELETE = "delete"
    RESTORE = "restore"


class ReactionAction(str, Enum):
    """Which way a reaction toggle flipped."""

    LIKED = "liked"
    UNLIKED = "unliked"
    DISLIKED = "disliked"
    UNDISLIKED = "undisliked"


class SortField(str, Enum):
    """Fields a thread page can be sorted by."""

    CREATED_AT = "createdAt"
    LIKES = "likes"
    REPLIES = "replies"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class CommentText(RootValueObject[str]):
    """Comment body.

    Surrounding whitespace is stripped, then the body must be
    1-2000 characters long.
    """

    @field_validator("root")
    @classmethod
    def validate_length(cls, v: str) -> str:
        """Strip and validate comment length."""
        v = v.strip()
        if len(v) < 1:
            raise ValueError("Comment content cannot be empty")
        if len(v) > MAX_CONTENT_LENGTH:
            raise ValueError(
                f"Comment content must not exceed {MAX_CONTENT_LENGTH} characters"
            )
        return v


class AuthorSnapshot(ValueObject):
    """Author display data copied onto a comment when it is created.

    This is a snapshot, not a live reference: later profile edits do not
    change comments that were already posted.
    """

    user_id: UserId
    name: str
    email: str
    photo: Optional[str] = None


class UserProfile(ValueObject):
    """Display profile returned by the user directory."""

    user_id: UserId
    first_name: str
    last_name: str
    email: str
    photo: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Full name as shown next to a comment."""
        return f"{self.first_name} {self.last_name}".strip()

    def to_snapshot(self) -> AuthorSnapshot:
        """Freeze this profile into an author snapshot."""
        return AuthorSnapshot(
            user_id=self.user_id,
            name=self.display_name,
            email=self.email.strip().lower(),
            photo=self.photo,
        )


class CallerIdentity(ValueObject):
    """Resolved identity of the caller, as handed over by the access gate."""

    user_id: UserId
    is_admin: bool = False
