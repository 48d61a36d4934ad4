"""Strongly typed identifiers for Remark domain entities.

Using NewType for strong typing prevents mixing up a comment id with the id
of the tutorial or course it is attached to.
"""

from typing import NewType
from uuid import UUID

CommentId = NewType("CommentId", UUID)
UserId = NewType("UserId", UUID)
ContentId = NewType("ContentId", UUID)  # Tutorial or course id
