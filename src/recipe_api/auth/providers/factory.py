"""Selection and lifetime of the process-wide auth provider.

``auth.mode`` picks one of four providers. The chosen instance lives in
a module-level slot read by the request dependency.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_api.auth.client.firebase_keys import FirebaseKeyClient
from recipe_api.auth.providers.exceptions import ConfigurationError
from recipe_api.auth.providers.firebase import FirebaseAuthProvider
from recipe_api.auth.providers.header import HeaderAuthProvider
from recipe_api.auth.providers.local_jwt import LocalJWTAuthProvider
from recipe_api.auth.providers.models import AuthResult
from recipe_api.core.config import AuthMode, get_settings
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_api.auth.providers.protocol import AuthProvider
    from recipe_api.core.config import Settings

logger = get_logger(__name__)

# Used only outside production when JWT_SECRET_KEY is empty
_DEV_JWT_SECRET = "insecure-dev-key-do-not-use-in-production"  # noqa: S105


def _get_jwt_secret(settings: Settings) -> str:
    """Return the configured HS256 secret, or the development one.

    Raises:
        ConfigurationError: If no secret is configured in production.
    """
    if settings.JWT_SECRET_KEY:
        return settings.JWT_SECRET_KEY

    if settings.is_production:
        msg = "JWT_SECRET_KEY must be set in production for local_jwt auth mode"
        raise ConfigurationError(msg)

    logger.warning("JWT_SECRET_KEY is empty, falling back to the development secret")
    return _DEV_JWT_SECRET


# Active provider, set during startup
_state: dict[str, AuthProvider | None] = {"provider": None}


class DisabledAuthProvider:
    """Auth provider that accepts every request as an anonymous caller.

    WARNING: This provider bypasses all authentication. Only use in tests.
    """

    @property
    def provider_name(self) -> str:
        return "disabled"

    async def validate_token(
        self,
        _token: str,
        _request: object = None,
    ) -> AuthResult:
        """Identify every caller as "anonymous"."""
        return AuthResult(
            user_id="anonymous",
            token_type="none",  # noqa: S106 - not a password
            raw_claims={"auth_disabled": True},
        )

    async def initialize(self) -> None:
        logger.warning(
            "Authentication is DISABLED: every request is served as anonymous"
        )

    async def shutdown(self) -> None:
        pass


def create_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Build (without initializing) the provider selected by ``auth.mode``.

    ``firebase`` needs FIREBASE_ID. ``header`` and ``disabled`` are refused
    in production.

    Raises:
        ConfigurationError: If required settings are missing for the auth mode,
            or a bypassing mode is selected in production.
    """
    if settings is None:
        settings = get_settings()

    mode = settings.auth_mode_enum
    logger.info("Creating auth provider", mode=mode.value)

    if mode in (AuthMode.DISABLED, AuthMode.HEADER) and settings.is_production:
        msg = f"Auth mode '{mode.value}' is not allowed in production"
        raise ConfigurationError(msg)

    if mode == AuthMode.DISABLED:
        return DisabledAuthProvider()

    if mode == AuthMode.HEADER:
        return HeaderAuthProvider(
            user_id_header=settings.auth.headers.user_id,
            email_header=settings.auth.headers.email,
        )

    if mode == AuthMode.LOCAL_JWT:
        return LocalJWTAuthProvider(
            secret_key=_get_jwt_secret(settings),
            algorithm=settings.auth.jwt.algorithm,
            issuer=settings.auth.jwt.issuer,
            audience=settings.auth.jwt.audience or None,
        )

    if mode == AuthMode.FIREBASE:
        if not settings.FIREBASE_ID:
            msg = "FIREBASE_ID environment variable not set"
            raise ConfigurationError(msg)

        firebase = settings.auth.firebase
        return FirebaseAuthProvider(
            project_id=settings.FIREBASE_ID,
            key_client=FirebaseKeyClient(
                jwks_url=firebase.jwks_url,
                timeout=firebase.timeout,
                default_ttl=firebase.key_cache_ttl,
            ),
            issuer_prefix=firebase.issuer_prefix,
        )

    # AuthMode gained a member this function does not handle
    msg = f"Unknown auth mode: {mode}"
    raise ConfigurationError(msg)


def get_auth_provider() -> AuthProvider:
    """Return the provider installed at startup.

    Raises:
        RuntimeError: If the provider has not been initialized.
    """
    provider = _state["provider"]
    if provider is None:
        msg = "No auth provider installed; initialize_auth_provider() runs at startup"
        raise RuntimeError(msg)
    return provider


def set_auth_provider(provider: AuthProvider | None) -> None:
    """Set (or clear, with None) the global auth provider instance."""
    _state["provider"] = provider
    if provider is not None:
        logger.info("Auth provider set", provider=provider.provider_name)


async def initialize_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create, initialize, and set the auth provider."""
    provider = create_auth_provider(settings)
    await provider.initialize()
    set_auth_provider(provider)
    return provider


async def shutdown_auth_provider() -> None:
    """Shutdown the global auth provider and clear the global instance."""
    provider = _state["provider"]
    if provider is not None:
        await provider.shutdown()
        _state["provider"] = None
        logger.info("Auth provider released")
