"""Comment routes.

Reads are public. Writes need a token from the ``auth_token`` cookie or an
``Authorization: Bearer`` header. Domain errors are mapped to responses by
the app's exception handlers.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel

from remark.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetCommentUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
    ReconcileRepliesRequest,
    ReconcileRepliesResponse,
    ReconcileRepliesUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from remark.application.usecase.moderation import (
    GetCommentStatsRequest,
    GetCommentStatsResponse,
    GetCommentStatsUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)
from remark.application.usecase.reaction import (
    ToggleReactionRequest,
    ToggleReactionResponse,
    ToggleReactionUseCase,
)
from remark.domain.service import JWTService
from remark.domain.value import CallerIdentity, ContentType, SortField, SortOrder
from remark.interface.error import AuthenticationError

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


def authenticate(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
) -> CallerIdentity:
    """Resolve the caller from the cookie or bearer header.

    Raises:
        AuthenticationError: If no valid token was sent
    """
    token = auth_token
    if not token and authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer":
            token = credentials.strip()

    caller = jwt_service.get_identity_from_token(token)
    if caller is None:
        raise AuthenticationError("Authentication required")
    return caller


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content_type: ContentType
    content_id: UUID
    content: str
    parent_id: UUID | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str


class ReportCommentAPIRequest(BaseModel):
    """API request for reporting a comment."""

    reason: str
    description: str | None = None


class ModerateCommentAPIRequest(BaseModel):
    """API request for a moderation action."""

    action: str
    reason: str | None = None


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Comment on a tutorial or course, or reply to another comment."""
    caller = authenticate(jwt_service, auth_token, authorization)
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            content_type=request.content_type,
            content_id=str(request.content_id),
            content=request.content,
            author_id=str(caller.user_id),
            parent_id=str(request.parent_id) if request.parent_id else None,
        )
    )


@router.get("/statistics", response_model=GetCommentStatsResponse)
async def get_comment_statistics(
    get_stats_use_case: FromDishka[GetCommentStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetCommentStatsResponse:
    """Moderation counters over every comment. Admin only."""
    caller = authenticate(jwt_service, auth_token, authorization)
    return await get_stats_use_case.execute(
        GetCommentStatsRequest(user_id=str(caller.user_id), is_admin=caller.is_admin)
    )


@router.get("/content/{content_id}", response_model=GetCommentsResponse)
async def get_comments(
    content_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    sort_by: SortField = Query(default=SortField.CREATED_AT),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
    content_type: ContentType | None = Query(default=None),
) -> GetCommentsResponse:
    """Get a page of top-level comments with their nested replies.

    Args:
        content_id: Tutorial or course UUID
        page: 1-based page number
        limit: Page size (1 to 50)
        sort_by: createdAt, likes or replies
        sort_order: asc or desc
        content_type: Restrict to tutorial or course comments
    """
    return await get_comments_use_case.execute(
        GetCommentsRequest(
            content_id=str(content_id),
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
            content_type=content_type,
        )
    )


@router.get("/{comment_id}", response_model=GetCommentResponse)
async def get_comment(
    comment_id: UUID,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> GetCommentResponse:
    """Get a single comment."""
    return await get_comment_use_case.execute(
        GetCommentRequest(comment_id=str(comment_id))
    )


@router.put("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: UUID,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UpdateCommentResponse:
    """Edit a comment. Only the author can edit."""
    caller = authenticate(jwt_service, auth_token, authorization)
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=str(comment_id),
            user_id=str(caller.user_id),
            content=request.content,
        )
    )


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and all of its replies. Author or admin."""
    caller = authenticate(jwt_service, auth_token, authorization)
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(
            comment_id=str(comment_id),
            user_id=str(caller.user_id),
            is_admin=caller.is_admin,
        )
    )


@router.get("/{comment_id}/replies", response_model=GetRepliesResponse)
async def get_replies(
    comment_id: UUID,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
) -> GetRepliesResponse:
    """Get a page of a comment's direct replies, oldest first."""
    return await get_replies_use_case.execute(
        GetRepliesRequest(comment_id=str(comment_id), page=page, limit=limit)
    )


async def _toggle(
    kind: str,
    comment_id: UUID,
    use_case: ToggleReactionUseCase,
    caller: CallerIdentity,
) -> ToggleReactionResponse:
    return await use_case.execute(
        ToggleReactionRequest(
            comment_id=str(comment_id), user_id=str(caller.user_id), kind=kind
        )
    )


@router.post("/{comment_id}/like", response_model=ToggleReactionResponse)
async def toggle_like(
    comment_id: UUID,
    toggle_reaction_use_case: FromDishka[ToggleReactionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ToggleReactionResponse:
    """Like a comment, or take the like back."""
    caller = authenticate(jwt_service, auth_token, authorization)
    return await _toggle("like", comment_id, toggle_reaction_use_case, caller)


@router.post("/{comment_id}/dislike", response_model=ToggleReactionResponse)
async def toggle_dislike(
    comment_id: UUID,
    toggle_reaction_use_case: FromDishka[ToggleReactionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ToggleReactionResponse:
    """Dislike a comment, or take the dislike back."""
    caller = authenticate(jwt_service, auth_token, authorization)
    return await _toggle("dislike", comment_id, toggle_reaction_use_case, caller)


@router.post("/{comment_id}/report", response_model=ReportCommentResponse)
async def report_comment(
    comment_id: UUID,
    request: ReportCommentAPIRequest,
    report_comment_use_case: FromDishka[ReportCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ReportCommentResponse:
    """Report a comment. Each user can report a comment once."""
    caller = authenticate(jwt_service, auth_token, authorization)
    return await report_comment_use_case.execute(
        ReportCommentRequest(
            comment_id=str(comment_id),
            user_id=str(caller.user_id),
            reason=request.reason,
            description=request.description,
        )
    )


@router.post("/{comment_id}/moderate", response_model=ModerateCommentResponse)
async def moderate_comment(
    comment_id: UUID,
    request: ModerateCommentAPIRequest,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ModerateCommentResponse:
    """Approve, reject, delete or restore a comment. Admin only."""
    caller = authenticate(jwt_service, auth_token, authorization)
    return await moderate_comment_use_case.execute(
        ModerateCommentRequest(
            comment_id=str(comment_id),
            moderator_id=str(caller.user_id),
            is_admin=caller.is_admin,
            action=request.action,
            reason=request.reason,
        )
    )


@router.post("/{comment_id}/reconcile", response_model=ReconcileRepliesResponse)
async def reconcile_replies(
    comment_id: UUID,
    reconcile_replies_use_case: FromDishka[ReconcileRepliesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ReconcileRepliesResponse:
    """Rebuild a comment's reply list from its children. Admin only."""
    caller = authenticate(jwt_service, auth_token, authorization)
    return await reconcile_replies_use_case.execute(
        ReconcileRepliesRequest(
            comment_id=str(comment_id),
            user_id=str(caller.user_id),
            is_admin=caller.is_admin,
        )
    )
