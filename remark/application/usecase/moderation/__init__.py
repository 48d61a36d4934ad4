"""Moderation use cases."""

from .get_stats import (
    GetCommentStatsRequest,
    GetCommentStatsResponse,
    GetCommentStatsUseCase,
    TopCommenterItem,
)
from .moderate_comment import (
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)
from .report_comment import (
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)

__all__ = [
    "GetCommentStatsRequest",
    "GetCommentStatsResponse",
    "GetCommentStatsUseCase",
    "ModerateCommentRequest",
    "ModerateCommentResponse",
    "ModerateCommentUseCase",
    "ReportCommentRequest",
    "ReportCommentResponse",
    "ReportCommentUseCase",
    "TopCommenterItem",
]
