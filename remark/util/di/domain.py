"""Domain layer DI providers."""

from dishka import Scope, provide

from remark.config import AuthSettings, ThreadSettings
from remark.domain.repository import (
    CommentRepository,
    ContentRepository,
    UserRepository,
)
from remark.domain.service import (
    CommentService,
    JWTService,
    ModerationService,
    ReactionService,
    ThreadService,
)
from remark.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        content_repository: ContentRepository,
        user_repository: UserRepository,
    ) -> CommentService:
        """Provide comment tree domain service."""
        return CommentService(
            comment_repository=comment_repository,
            content_repository=content_repository,
            user_repository=user_repository,
        )

    @provide
    def get_reaction_service(
        self, comment_repository: CommentRepository
    ) -> ReactionService:
        """Provide like/dislike domain service."""
        return ReactionService(comment_repository=comment_repository)

    @provide
    def get_moderation_service(
        self,
        comment_repository: CommentRepository,
        comment_service: CommentService,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            comment_repository=comment_repository,
            comment_service=comment_service,
        )

    @provide
    def get_thread_service(
        self,
        comment_repository: CommentRepository,
        content_repository: ContentRepository,
        thread_settings: ThreadSettings,
    ) -> ThreadService:
        """Provide thread read service."""
        return ThreadService(
            comment_repository=comment_repository,
            content_repository=content_repository,
            thread_settings=thread_settings,
        )
