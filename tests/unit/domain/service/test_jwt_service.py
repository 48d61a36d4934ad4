"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from remark.config import AuthSettings
from remark.domain.service import JWTService
from remark.util.jwt import JWTError


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(jwt_secret="test-secret")


@pytest.fixture
def jwt_service(auth_settings) -> JWTService:
    return JWTService(auth_settings=auth_settings)


class TestJWTService:
    """Tests for token creation and the caller identity gate."""

    def test_round_trip_keeps_user_and_admin_flag(self, jwt_service):
        """A created token resolves back to the same caller."""
        # Arrange
        user_id = str(uuid4())

        # Act
        token = jwt_service.create_token(user_id, is_admin=True)
        caller = jwt_service.get_identity_from_token(token)

        # Assert
        assert str(caller.user_id) == user_id
        assert caller.is_admin is True

    def test_missing_token_is_anonymous(self, jwt_service):
        """No token means no caller."""
        assert jwt_service.get_identity_from_token(None) is None
        assert jwt_service.get_identity_from_token("") is None

    def test_garbage_token_is_anonymous(self, jwt_service):
        """Undecodable tokens are treated as unauthenticated."""
        assert jwt_service.get_identity_from_token("not-a-token") is None

    def test_token_signed_with_other_secret_is_rejected(self, jwt_service):
        """verify_token raises on a bad signature."""
        # Arrange
        token = JWTService(AuthSettings(jwt_secret="other")).create_token(
            str(uuid4())
        )

        # Act & Assert
        with pytest.raises(JWTError, match="Invalid token"):
            jwt_service.verify_token(token)

    def test_expired_token_is_rejected(self, jwt_service, auth_settings):
        """Expired tokens raise on verify and resolve to no caller."""
        # Arrange
        token = jwt.encode(
            {
                "user_id": str(uuid4()),
                "is_admin": False,
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            auth_settings.jwt_secret,
            algorithm=auth_settings.jwt_algorithm,
        )

        # Act & Assert
        with pytest.raises(JWTError, match="expired"):
            jwt_service.verify_token(token)
        assert jwt_service.get_identity_from_token(token) is None

    def test_non_uuid_user_id_is_anonymous(self, jwt_service):
        """A token whose subject is not a UUID gives no caller."""
        # Arrange
        token = jwt_service.create_token("not-a-uuid")

        # Act
        caller = jwt_service.get_identity_from_token(token)

        # Assert
        assert caller is None
