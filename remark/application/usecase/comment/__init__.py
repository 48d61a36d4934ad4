"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comment import GetCommentRequest, GetCommentResponse, GetCommentUseCase
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .get_replies import GetRepliesRequest, GetRepliesResponse, GetRepliesUseCase
from .reconcile_replies import (
    ReconcileRepliesRequest,
    ReconcileRepliesResponse,
    ReconcileRepliesUseCase,
)
from .update_comment import (
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)

__all__ = [
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentRequest",
    "GetCommentResponse",
    "GetCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "GetRepliesRequest",
    "GetRepliesResponse",
    "GetRepliesUseCase",
    "ReconcileRepliesRequest",
    "ReconcileRepliesResponse",
    "ReconcileRepliesUseCase",
    "UpdateCommentRequest",
    "UpdateCommentResponse",
    "UpdateCommentUseCase",
]
