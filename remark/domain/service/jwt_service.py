"""JWT token domain service."""

from uuid import UUID

import logfire

from remark.config import AuthSettings
from remark.domain.value import CallerIdentity, UserId
from remark.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations.

    Acts as the access gate: turns a bearer token into the caller identity
    the comment services consume.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, is_admin: bool = False) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            is_admin: Whether the user has moderator rights

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, is_admin, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id, is_admin=is_admin)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_identity_from_token(self, token: str | None) -> CallerIdentity | None:
        """Resolve the caller identity without raising exceptions.

        Args:
            token: JWT token string (optional)

        Returns:
            Caller identity if token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return CallerIdentity(
                user_id=UserId(UUID(payload.user_id)),
                is_admin=payload.is_admin,
            )
        except (JWTError, ValueError) as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
