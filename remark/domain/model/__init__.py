"""Domain model entities for Remark."""

from remark.domain.model.comment import (
    MAX_COMMENT_LEVEL,
    Comment,
    EditRecord,
    Report,
)
from remark.domain.model.stats import CommentStats, TopCommenter

__all__ = [
    "MAX_COMMENT_LEVEL",
    "Comment",
    "CommentStats",
    "EditRecord",
    "Report",
    "TopCommenter",
]
