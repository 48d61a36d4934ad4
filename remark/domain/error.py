"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (content length, enum values, paging)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidRelationError(DomainError):
    """Raised when a reply targets a parent attached to different content."""

    def __init__(self, parent_id: str, content_id: str):
        self.parent_id = parent_id
        self.content_id = content_id
        super().__init__(
            f"Parent comment {parent_id} does not belong to content {content_id}"
        )


class DepthExceededError(DomainError):
    """Raised when a reply would nest deeper than the maximum level."""

    def __init__(self, parent_id: str, max_level: int):
        self.parent_id = parent_id
        self.max_level = max_level
        super().__init__(
            f"Maximum comment nesting level ({max_level}) reached under {parent_id}"
        )


class ForbiddenError(DomainError):
    """Raised when a user acts on a comment they neither own nor moderate."""

    def __init__(self, action: str, resource_id: str, user_id: str):
        self.action = action
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not allowed to {action} comment {resource_id}"
        )


class AlreadyReportedError(DomainError):
    """Raised when a user reports the same comment twice."""

    def __init__(self, comment_id: str, user_id: str):
        self.comment_id = comment_id
        self.user_id = user_id
        super().__init__(f"User {user_id} has already reported comment {comment_id}")


class InvalidActionError(DomainError):
    """Raised for an unrecognized moderation action."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Invalid moderation action: {action}")
