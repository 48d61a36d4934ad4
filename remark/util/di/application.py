"""Application layer DI providers."""

from dishka import Scope, provide

from remark.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    GetCommentUseCase,
    GetRepliesUseCase,
    ReconcileRepliesUseCase,
    UpdateCommentUseCase,
)
from remark.application.usecase.moderation import (
    GetCommentStatsUseCase,
    ModerateCommentUseCase,
    ReportCommentUseCase,
)
from remark.application.usecase.reaction import ToggleReactionUseCase
from remark.domain.service import (
    CommentService,
    ModerationService,
    ReactionService,
    ThreadService,
)
from remark.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Comment use cases
    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_reconcile_replies_use_case(
        self, comment_service: CommentService
    ) -> ReconcileRepliesUseCase:
        """Provide reconcile replies use case."""
        return ReconcileRepliesUseCase(comment_service=comment_service)

    # Thread read use cases
    @provide
    def get_get_comments_use_case(
        self, thread_service: ThreadService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(thread_service=thread_service)

    @provide
    def get_get_replies_use_case(
        self, thread_service: ThreadService
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(thread_service=thread_service)

    @provide
    def get_get_comment_stats_use_case(
        self, thread_service: ThreadService
    ) -> GetCommentStatsUseCase:
        """Provide comment statistics use case."""
        return GetCommentStatsUseCase(thread_service=thread_service)

    # Reaction use cases
    @provide
    def get_toggle_reaction_use_case(
        self, reaction_service: ReactionService
    ) -> ToggleReactionUseCase:
        """Provide toggle reaction use case."""
        return ToggleReactionUseCase(reaction_service=reaction_service)

    # Moderation use cases
    @provide
    def get_report_comment_use_case(
        self, moderation_service: ModerationService
    ) -> ReportCommentUseCase:
        """Provide report comment use case."""
        return ReportCommentUseCase(moderation_service=moderation_service)

    @provide
    def get_moderate_comment_use_case(
        self, moderation_service: ModerationService
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(moderation_service=moderation_service)
