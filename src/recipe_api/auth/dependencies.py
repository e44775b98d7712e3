"""FastAPI security dependencies.

Every recipe route depends on ``get_current_user``. It extracts the bearer
credential, delegates to the configured auth provider (firebase, local_jwt,
header, or disabled) and maps failures to HTTP responses: any
authentication failure is a 403, an unreachable key endpoint is a 503.
"""

from __future__ import annotations

from typing import Annotated, Final

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from recipe_api.auth.providers import (
    AuthenticationError,
    AuthResult,
    AuthServiceUnavailableError,
    get_auth_provider,
)
from recipe_api.core.exceptions import (
    INVALID_TOKEN_MESSAGE,
    ForbiddenException,
    ServiceUnavailableException,
)
from recipe_api.observability.logging import bind_context, get_logger


logger = get_logger(__name__)

# Owner email used when a verified identity carries none; matches no recipe
EMPTY_EMAIL: Final[str] = "empty email"

# Providers that identify the caller without a bearer token
_TOKENLESS_PROVIDERS: Final[frozenset[str]] = frozenset({"header", "disabled"})

# Bearer scheme (used for token extraction, not validation)
bearer_scheme = HTTPBearer(
    scheme_name="FirebaseIdToken",
    description="Firebase ID token sent as 'Authorization: Bearer <token>'",
    auto_error=False,
)


class CurrentUser(BaseModel):
    """The authenticated caller."""

    id: str
    email: str = EMPTY_EMAIL
    email_verified: bool = False

    @classmethod
    def from_auth_result(cls, result: AuthResult) -> CurrentUser:
        """Create CurrentUser from AuthResult."""
        return cls(
            id=result.user_id,
            email=result.email or EMPTY_EMAIL,
            email_verified=result.email_verified,
        )


def _unauthorized() -> ForbiddenException:
    logger.warning(
        f"Unauthorized access attempt detected. Responding with '{INVALID_TOKEN_MESSAGE}'."
    )
    return ForbiddenException()


async def get_auth_result(
    request: Request,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> AuthResult:
    """Validate the bearer credential using the configured auth provider.

    Raises:
        ForbiddenException: If the credential is missing or fails verification.
        ServiceUnavailableException: If signing keys cannot be fetched.
    """
    provider = get_auth_provider()

    token = credentials.credentials if credentials else ""
    if not token and provider.provider_name not in _TOKENLESS_PROVIDERS:
        raise _unauthorized()

    try:
        return await provider.validate_token(token, request)

    except AuthenticationError as e:
        logger.debug("Credential rejected", provider=provider.provider_name, reason=str(e))
        raise _unauthorized() from None

    except AuthServiceUnavailableError as e:
        raise ServiceUnavailableException(
            f"Authentication service unavailable: {e}"
        ) from None


async def get_current_user(
    auth_result: Annotated[AuthResult, Depends(get_auth_result)],
) -> CurrentUser:
    """Get the current authenticated user.

    This is the dependency for protected routes.
    """
    user = CurrentUser.from_auth_result(auth_result)
    bind_context(user_id=user.id)
    return user


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
