"""Response items shared by the comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from remark.domain.model import Comment
from remark.domain.service import CommentNode, Pagination
from remark.domain.value import ContentType


class AuthorItem(BaseModel):
    """Author snapshot in response."""

    user_id: str
    name: str
    email: str
    photo: str | None = None


class EditItem(BaseModel):
    """Previous version of a comment body."""

    content: str
    edited_at: datetime


class CommentItem(BaseModel):
    """Comment item in response.

    ``replies`` holds the ids of direct children.
    """

    comment_id: str
    content: str
    author: AuthorItem
    content_type: ContentType
    content_id: str
    parent_id: str | None
    level: int
    replies: list[str]
    like_count: int
    dislike_count: int
    reply_count: int
    is_approved: bool
    is_edited: bool
    edit_history: list[EditItem]
    is_reported: bool
    report_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls(**_comment_fields(comment), replies=[str(r) for r in comment.replies])


class CommentNodeItem(CommentItem):
    """Comment in a thread, ``replies`` holds the nested reply items."""

    replies: list["CommentNodeItem"]  # type: ignore[assignment]

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentNodeItem":
        return cls(
            **_comment_fields(node.comment),
            replies=[cls.from_node(child) for child in node.replies],
        )


class PaginationItem(BaseModel):
    """Page metadata in response."""

    current_page: int
    total_pages: int
    total_comments: int
    has_next: bool
    has_prev: bool
    limit: int

    @classmethod
    def from_pagination(cls, pagination: Pagination) -> "PaginationItem":
        return cls(
            current_page=pagination.current_page,
            total_pages=pagination.total_pages,
            total_comments=pagination.total_comments,
            has_next=pagination.has_next,
            has_prev=pagination.has_prev,
            limit=pagination.limit,
        )


def _comment_fields(comment: Comment) -> dict:
    return {
        "comment_id": str(comment.id),
        "content": comment.content,
        "author": AuthorItem(
            user_id=str(comment.author.user_id),
            name=comment.author.name,
            email=comment.author.email,
            photo=comment.author.photo,
        ),
        "content_type": comment.content_type,
        "content_id": str(comment.content_id),
        "parent_id": str(comment.parent_id) if comment.parent_id else None,
        "level": comment.level,
        "like_count": comment.like_count,
        "dislike_count": comment.dislike_count,
        "reply_count": comment.reply_count,
        "is_approved": comment.is_approved,
        "is_edited": comment.is_edited,
        "edit_history": [
            EditItem(content=e.content, edited_at=e.edited_at)
            for e in comment.edit_history
        ],
        "is_reported": comment.is_reported,
        "report_count": comment.report_count,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }
