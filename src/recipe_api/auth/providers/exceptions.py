"""Authentication provider exceptions.

These exceptions are caught by the dependency layer and converted to
HTTP responses: authentication failures become 403, an unreachable key
endpoint becomes 503.
"""

from __future__ import annotations


class AuthProviderError(Exception):
    """Base exception for auth provider errors."""


class AuthenticationError(AuthProviderError):
    """Raised when authentication fails for any reason."""


class TokenExpiredError(AuthenticationError):
    """Raised when a token has expired."""


class TokenInvalidError(AuthenticationError):
    """Raised when a token is malformed or signature verification fails."""


class AuthServiceUnavailableError(AuthProviderError):
    """Raised when the signing key endpoint cannot be reached."""


class ConfigurationError(AuthProviderError):
    """Raised when the auth provider is misconfigured."""
