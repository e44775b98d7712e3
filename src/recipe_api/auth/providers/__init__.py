"""Authentication providers package.

This package provides pluggable authentication providers that implement
the AuthProvider protocol. The factory module creates the appropriate
provider based on configuration.

Available providers:
- FirebaseAuthProvider: Verifies Firebase ID tokens
- LocalJWTAuthProvider: Validates JWTs locally
- HeaderAuthProvider: Extracts user from headers (development only)
- DisabledAuthProvider: Allows all requests (testing only)

Usage:
    from recipe_api.auth.providers import get_auth_provider

    provider = get_auth_provider()
    result = await provider.validate_token(token, request)
"""

from recipe_api.auth.providers.exceptions import (
    AuthenticationError,
    AuthProviderError,
    AuthServiceUnavailableError,
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_api.auth.providers.factory import (
    DisabledAuthProvider,
    create_auth_provider,
    get_auth_provider,
    initialize_auth_provider,
    set_auth_provider,
    shutdown_auth_provider,
)
from recipe_api.auth.providers.firebase import FirebaseAuthProvider
from recipe_api.auth.providers.header import HeaderAuthProvider
from recipe_api.auth.providers.local_jwt import LocalJWTAuthProvider
from recipe_api.auth.providers.models import AuthResult
from recipe_api.auth.providers.protocol import AuthProvider


__all__ = [
    "AuthProvider",
    "AuthProviderError",
    "AuthResult",
    "AuthServiceUnavailableError",
    "AuthenticationError",
    "ConfigurationError",
    "DisabledAuthProvider",
    "FirebaseAuthProvider",
    "HeaderAuthProvider",
    "LocalJWTAuthProvider",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_auth_provider",
    "get_auth_provider",
    "initialize_auth_provider",
    "set_auth_provider",
    "shutdown_auth_provider",
]
