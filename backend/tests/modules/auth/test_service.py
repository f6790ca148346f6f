import pytest
from unittest.mock import MagicMock
import jwt
from datetime import datetime, timedelta, timezone

from modules.auth.models import UserProfile
from modules.auth.service import AuthService
from modules.auth.exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)
from shared.config import Settings

SECRET = "test-secret"


def make_token(secret: str = SECRET, **overrides) -> str:
    payload = {
        "sub": "user-123",
        "email": "test@example.com",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        "iat": datetime.now(timezone.utc),
        "aud": "authenticated",
        "role": "authenticated",
    }
    payload.update(overrides)
    return jwt.encode(payload, secret, algorithm="HS256")


class TestAuthService:
    @pytest.fixture
    def users(self):
        return MagicMock()

    @pytest.fixture
    def service(self, users):
        """Create auth service with an injected secret and user repository."""
        return AuthService(settings=Settings(supabase_jwt_secret=SECRET), users=users)

    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service):
        """Should validate a valid token and return user."""
        user = await service.validate_token(make_token())
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.name == "test"
        assert user.last_sign_in is not None

    @pytest.mark.asyncio
    async def test_name_from_metadata(self, service):
        user = await service.validate_token(make_token(user_metadata={"name": "Ada"}))
        assert user.name == "Ada"

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service):
        """Should raise ExpiredTokenError for expired token."""
        token = make_token(
            exp=datetime.now(timezone.utc) - timedelta(hours=1),
            iat=datetime.now(timezone.utc) - timedelta(hours=2),
        )
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_validate_invalid_token(self, service):
        """Should raise InvalidTokenError for malformed token."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    async def test_validate_missing_token(self, service):
        """Should raise MissingTokenError for empty token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token("")

    @pytest.mark.asyncio
    async def test_validate_none_token(self, service):
        """Should raise MissingTokenError for None token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token(None)

    @pytest.mark.asyncio
    async def test_validate_wrong_secret(self, service):
        """Should raise InvalidTokenError for token signed with wrong secret."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token(make_token(secret="wrong-secret"))

    @pytest.mark.asyncio
    async def test_validate_wrong_audience(self, service):
        """Should raise InvalidTokenError for token with wrong audience."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token(make_token(aud="wrong-audience"))

    @pytest.mark.asyncio
    async def test_secret_not_configured(self, users):
        service = AuthService(settings=Settings(supabase_jwt_secret=""), users=users)
        with pytest.raises(AuthNotConfiguredError):
            await service.validate_token(make_token())

    @pytest.mark.asyncio
    async def test_get_user_by_id(self, service, users):
        profile = UserProfile(id="user-123", email="test@example.com", name="Test")
        users.get_by_id.return_value = profile

        assert await service.get_user_by_id("user-123") == profile
        users.get_by_id.assert_called_once_with("user-123")

    @pytest.mark.asyncio
    async def test_get_user_by_email_missing(self, service, users):
        users.get_by_email.return_value = None

        assert await service.get_user_by_email("nobody@example.com") is None
