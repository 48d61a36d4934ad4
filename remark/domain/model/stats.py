"""Read-side projections for comment statistics."""

from pydantic import Field

from remark.domain.model.common import DomainModel
from remark.domain.value import UserId


class TopCommenter(DomainModel):
    """A user ranked by number of approved comments."""

    user_id: UserId
    name: str
    comment_count: int = Field(ge=0)


class CommentStats(DomainModel):
    """Aggregated counters over every stored comment."""

    total_comments: int = Field(ge=0)
    approved_comments: int = Field(ge=0)
    pending_comments: int = Field(ge=0)
    reported_comments: int = Field(ge=0)
    total_replies: int = Field(ge=0)
    average_comments_per_tutorial: float = Field(ge=0)
    top_commenters: list[TopCommenter]
