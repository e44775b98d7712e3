"""Firebase ID token authentication provider.

Verifies ID tokens issued by Firebase Authentication:
- RS256 signature by one of Google's published ``securetoken`` keys
- ``aud`` equal to the Firebase project id
- ``iss`` equal to ``https://securetoken.google.com/<project id>``
- non-empty ``sub`` and an ``auth_time`` that is not in the future
- ``exp``/``iat`` checked by python-jose
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

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

    from recipe_api.auth.client.firebase_keys import FirebaseKeyClient

logger = get_logger(__name__)

_ALGORITHM = "RS256"


class FirebaseAuthProvider:
    """Validates Firebase ID tokens against Google's public keys.

    Attributes:
        project_id: Firebase project id (expected audience).
        issuer: Expected 'iss' claim.
    """

    def __init__(
        self,
        project_id: str,
        key_client: FirebaseKeyClient,
        issuer_prefix: str = "https://securetoken.google.com/",
    ) -> None:
        self.project_id = project_id
        self.issuer = f"{issuer_prefix}{project_id}"
        self.key_client = key_client

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "firebase"

    async def validate_token(
        self,
        token: str,
        _request: Request | None = None,
    ) -> AuthResult:
        """Verify a Firebase ID token.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If any signature or claim check fails.
            AuthServiceUnavailableError: If signing keys cannot be fetched.
        """
        if not token:
            msg = "Empty token"
            raise TokenInvalidError(msg)

        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            msg = "Malformed token header"
            raise TokenInvalidError(msg) from e

        if header.get("alg") != _ALGORITHM:
            msg = f"Unexpected signing algorithm: {header.get('alg')}"
            raise TokenInvalidError(msg)

        kid = header.get("kid")
        if not kid:
            msg = "Token header missing 'kid'"
            raise TokenInvalidError(msg)

        key = await self.key_client.get_key(kid)
        if key is None:
            msg = f"No signing key matches kid {kid}"
            raise TokenInvalidError(msg)

        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[_ALGORITHM],
                audience=self.project_id,
                issuer=self.issuer,
            )

        except ExpiredSignatureError as e:
            logger.debug("Firebase token expired")
            msg = "Token has expired"
            raise TokenExpiredError(msg) from e

        except JWTClaimsError as e:
            logger.warning("Firebase token claims validation failed", error=str(e))
            raise TokenInvalidError(str(e)) from e

        except JWTError as e:
            logger.warning("Firebase token validation failed", error=str(e))
            msg = "Invalid token"
            raise TokenInvalidError(msg) from e

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            msg = "Token missing 'sub' claim"
            raise TokenInvalidError(msg)

        auth_time = payload.get("auth_time")
        if (
            not isinstance(auth_time, int | float)
            or auth_time > datetime.now(UTC).timestamp()
        ):
            msg = "Token 'auth_time' is missing or in the future"
            raise TokenInvalidError(msg)

        return AuthResult(
            user_id=user_id,
            email=payload.get("email"),
            email_verified=bool(payload.get("email_verified", False)),
            token_type="id_token",  # noqa: S106 - not a password
            issuer=payload.get("iss"),
            audience=audience_list(payload.get("aud")),
            expires_at=payload.get("exp"),
            issued_at=payload.get("iat"),
            raw_claims=payload,
        )

    async def initialize(self) -> None:
        """Open the key client.

        Raises:
            ConfigurationError: If no project id is configured.
        """
        if not self.project_id:
            msg = "FIREBASE_ID environment variable not set"
            raise ConfigurationError(msg)

        await self.key_client.initialize()
        logger.info(
            "FirebaseAuthProvider initialized",
            project_id=self.project_id,
            issuer=self.issuer,
        )

    async def shutdown(self) -> None:
        """Close the key client."""
        await self.key_client.shutdown()
        logger.debug("FirebaseAuthProvider shutdown")
