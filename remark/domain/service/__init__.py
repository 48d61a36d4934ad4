"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .moderation_service import ModerationService
from .reaction_service import ReactionResult, ReactionService
from .thread_service import (
    CommentNode,
    Pagination,
    RepliesPage,
    ThreadPage,
    ThreadService,
)

__all__ = [
    "CommentNode",
    "CommentService",
    "JWTService",
    "ModerationService",
    "Pagination",
    "ReactionResult",
    "ReactionService",
    "RepliesPage",
    "Service",
    "ThreadPage",
    "ThreadService",
]
