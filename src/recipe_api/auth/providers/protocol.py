"""Authentication provider protocol definition.

Every identity verifier (Firebase, local JWT, trusted headers, disabled)
implements AuthProvider so request handlers only ever see an AuthResult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from starlette.requests import Request

    from recipe_api.auth.providers.models import AuthResult


@runtime_checkable
class AuthProvider(Protocol):
    """Protocol for authentication providers.

    The lifecycle is: ``initialize()`` once at startup, ``validate_token()``
    concurrently for every request, ``shutdown()`` once at exit.
    """

    @property
    def provider_name(self) -> str:
        """Short provider name used in log records ('firebase', 'header', ...)."""
        ...

    async def validate_token(
        self,
        token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Verify a bearer credential and return the caller's identity.

        Args:
            token: The bearer token. Empty for header-based auth.
            request: Incoming request, for providers that read headers.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed, signed by an unknown
                key, or carries the wrong audience/issuer.
            AuthenticationError: For other authentication failures.
            AuthServiceUnavailableError: If signing keys cannot be fetched.
        """
        ...

    async def initialize(self) -> None:
        """Prepare the provider (open HTTP clients, check configuration).

        Raises:
            ConfigurationError: If the provider is misconfigured.
        """
        ...

    async def shutdown(self) -> None:
        """Release provider resources."""
        ...
