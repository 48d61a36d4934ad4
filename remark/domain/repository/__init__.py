"""Repository interfaces for Remark domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from remark.domain.repository.comment import CommentRepository
from remark.domain.repository.content import ContentRepository
from remark.domain.repository.user import UserRepository

__all__ = [
    "CommentRepository",
    "ContentRepository",
    "UserRepository",
]
