"""Shared-secret JWT provider.

Validates HS256 tokens signed with a shared secret. Meant for development
and automated tests, where no Firebase project is available.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from recipe_api.auth.providers.exceptions import (
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_api.auth.providers.models import AuthResult, audience_list
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


class LocalJWTAuthProvider:
    """Checks tokens signed with ``JWT_SECRET_KEY``.

    Attributes:
        secret_key: The shared signing secret.
        algorithm: Accepted signing algorithm, HS256 unless configured.
        issuer: Required 'iss' value, or None to skip the check.
        audience: Expected 'aud' claim value (optional).
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
        audience: list[str] | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience if audience else None

    @property
    def provider_name(self) -> str:
        """Short name used in logs."""
        return "local_jwt"

    async def validate_token(
        self,
        token: str,
        _request: Request | None = None,
    ) -> AuthResult:
        """Decode ``token`` and return the identity in its claims.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed or signature fails.
        """
        decode_kwargs: dict[str, Any] = {"algorithms": [self.algorithm]}
        if self.issuer:
            decode_kwargs["issuer"] = self.issuer
        if self.audience:
            decode_kwargs["audience"] = self.audience[0]
        else:
            decode_kwargs["options"] = {"verify_aud": False}

        try:
            payload = jwt.decode(token, self.secret_key, **decode_kwargs)

        except ExpiredSignatureError as e:
            logger.debug("Local JWT expired")
            msg = "Token has expired"
            raise TokenExpiredError(msg) from e

        except JWTClaimsError as e:
            logger.warning("JWT claims validation failed", error=str(e))
            raise TokenInvalidError(str(e)) from e

        except JWTError as e:
            logger.warning("JWT validation failed", error=str(e))
            msg = "Invalid token"
            raise TokenInvalidError(msg) from e

        user_id = payload.get("sub")
        if not user_id:
            msg = "Token missing 'sub' claim"
            raise TokenInvalidError(msg)

        return AuthResult(
            user_id=user_id,
            email=payload.get("email"),
            email_verified=bool(payload.get("email_verified", False)),
            token_type="access",  # noqa: S106 - not a password
            issuer=payload.get("iss"),
            audience=audience_list(payload.get("aud")),
            expires_at=payload.get("exp"),
            issued_at=payload.get("iat"),
            raw_claims=payload,
        )

    async def initialize(self) -> None:
        """Check that a secret key is configured.

        Raises:
            ConfigurationError: If the secret key is empty.
        """
        if not self.secret_key:
            msg = "JWT secret key is not configured"
            raise ConfigurationError(msg)

        logger.info(
            "LocalJWTAuthProvider initialized",
            algorithm=self.algorithm,
            issuer_validation=self.issuer is not None,
            audience_validation=self.audience is not None,
        )

    async def shutdown(self) -> None:
        """Nothing to release."""
        logger.debug("LocalJWTAuthProvider shutdown")
