"""PostgreSQL repository implementations."""

from remark.persistence.repository.comment import PostgresCommentRepository
from remark.persistence.repository.content import PostgresContentRepository
from remark.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresContentRepository",
    "PostgresUserRepository",
]
