"""Unit tests for LocalJWTAuthProvider."""

from __future__ import annotations

import time

import pytest
from jose import jwt

from recipe_api.auth.providers.exceptions import (
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_api.auth.providers.local_jwt import LocalJWTAuthProvider


pytestmark = pytest.mark.unit

SECRET = "test-secret-key-minimum-32-characters-long"  # noqa: S105


def _token(secret: str = SECRET, **claims: object) -> str:
    now = int(time.time())
    payload: dict[str, object] = {"sub": "user-1", "email": "a@b.com", "iat": now, "exp": now + 300}
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


class TestLocalJWTAuthProvider:
    """Tests for local JWT validation."""

    @pytest.fixture
    def provider(self) -> LocalJWTAuthProvider:
        """Provider without issuer or audience checks."""
        return LocalJWTAuthProvider(secret_key=SECRET)

    @pytest.mark.asyncio
    async def test_valid_token(self, provider: LocalJWTAuthProvider) -> None:
        """Should return the identity from the claims."""
        result = await provider.validate_token(_token())

        assert result.user_id == "user-1"
        assert result.email == "a@b.com"

    @pytest.mark.asyncio
    async def test_ignores_audience_when_not_configured(
        self, provider: LocalJWTAuthProvider
    ) -> None:
        """Should accept any audience when none is configured."""
        result = await provider.validate_token(_token(aud="anything"))

        assert result.audience == ["anything"]

    @pytest.mark.asyncio
    async def test_expired(self, provider: LocalJWTAuthProvider) -> None:
        """Should raise TokenExpiredError."""
        with pytest.raises(TokenExpiredError):
            await provider.validate_token(_token(exp=int(time.time()) - 10))

    @pytest.mark.asyncio
    async def test_wrong_secret(self, provider: LocalJWTAuthProvider) -> None:
        """Should raise TokenInvalidError."""
        with pytest.raises(TokenInvalidError):
            await provider.validate_token(_token(secret="another-secret-entirely-32-chars!"))

    @pytest.mark.asyncio
    async def test_missing_subject(self, provider: LocalJWTAuthProvider) -> None:
        """Should require a sub claim."""
        token = jwt.encode({"email": "a@b.com"}, SECRET, algorithm="HS256")

        with pytest.raises(TokenInvalidError, match="sub"):
            await provider.validate_token(token)

    @pytest.mark.asyncio
    async def test_audience_mismatch(self) -> None:
        """Should enforce a configured audience."""
        provider = LocalJWTAuthProvider(secret_key=SECRET, audience=["recipe-api"])

        with pytest.raises(TokenInvalidError):
            await provider.validate_token(_token(aud="other"))

    @pytest.mark.asyncio
    async def test_issuer_enforced(self) -> None:
        """Should enforce a configured issuer."""
        provider = LocalJWTAuthProvider(secret_key=SECRET, issuer="https://issuer.test")

        result = await provider.validate_token(_token(iss="https://issuer.test"))
        assert result.issuer == "https://issuer.test"

        with pytest.raises(TokenInvalidError):
            await provider.validate_token(_token(iss="https://other.test"))

    @pytest.mark.asyncio
    async def test_initialize_requires_secret(self) -> None:
        """Should refuse an empty secret."""
        with pytest.raises(ConfigurationError):
            await LocalJWTAuthProvider(secret_key="").initialize()
