"""Typed service configuration.

Values are layered: code defaults, then ``config/base/*.yaml``, then
``config/environments/<APP_ENV>/*.yaml``, then ``.env``, then real
environment variables, then keyword arguments. Connection strings and
project ids are never kept in YAML.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class AuthMode(StrEnum):
    """How callers are identified.

    - FIREBASE: Firebase ID token checked against Google's signing keys
    - LOCAL_JWT: HS256 token signed with ``JWT_SECRET_KEY``
    - HEADER: identity taken from X-User-ID / X-User-Email
    - DISABLED: every caller is anonymous
    """

    FIREBASE = "firebase"
    LOCAL_JWT = "local_jwt"
    HEADER = "header"
    DISABLED = "disabled"


def parse_list(v: str | list[str]) -> list[str]:
    """Accept either a list or a comma separated string."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


# -----------------------------------------------------------------------------
# YAML sections
# -----------------------------------------------------------------------------


class AppSettings(BaseModel):
    """Name and version reported in the OpenAPI document."""

    name: str = "Recipe API"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Bind address for ``python -m recipe_api.main``."""

    host: str = "127.0.0.1"
    port: int = 8080


class PaginationSettings(BaseModel):
    """Defaults for paginated listings."""

    default_page: int = 1
    default_per_page: int = 5
    max_per_page: int = 100


class ApiSettings(BaseModel):
    """Routing and CORS."""

    prefix: str = ""
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = ["*"]
    cors_max_age: int = 3600
    pagination: PaginationSettings = PaginationSettings()


class FirebaseSettings(BaseModel):
    """Firebase ID token verification settings."""

    jwks_url: str = (
        "https://www.googleapis.com/service_accounts/v1/jwk/"
        "securetoken@system.gserviceaccount.com"
    )
    issuer_prefix: str = "https://securetoken.google.com/"
    key_cache_ttl: int = 3600
    timeout: float = 5.0


class JwtSettings(BaseModel):
    """Local JWT validation settings."""

    algorithm: str = "HS256"
    issuer: str | None = None
    audience: list[str] = []


class AuthHeaderSettings(BaseModel):
    """Header names read in header mode."""

    user_id: str = "X-User-ID"
    email: str = "X-User-Email"


class AuthSettings(BaseModel):
    """Provider selection plus per-provider options."""

    mode: str = "firebase"
    firebase: FirebaseSettings = FirebaseSettings()
    jwt: JwtSettings = JwtSettings()
    headers: AuthHeaderSettings = AuthHeaderSettings()


class MongoSettings(BaseModel):
    """Database and collection names, driver pool options."""

    database: str = "alsomeb"
    recipes_collection: str = "Recipes"
    server_selection_timeout_ms: int = 5000
    max_pool_size: int = 100


class LoggingSettings(BaseModel):
    """Log level and output format ("json" or "text")."""

    level: str = "INFO"
    format: str = "json"


# -----------------------------------------------------------------------------
# Root settings
# -----------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings object.

    Any nested value can be set from the environment with ``__`` between
    levels, e.g. ``MONGO__RECIPES_COLLECTION=Recipes_v2``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    # Selects config/environments/<APP_ENV>
    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    mongo: MongoSettings = MongoSettings()
    logging: LoggingSettings = LoggingSettings()

    # Environment or .env only
    MONGO_URI: str = ""
    FIREBASE_ID: str = ""
    JWT_SECRET_KEY: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML layer below the environment and above secrets files."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def auth_mode_enum(self) -> AuthMode:
        """``auth.mode`` as an AuthMode.

        Raises:
            ValueError: If the configured mode is not a known AuthMode.
        """
        try:
            return AuthMode(self.auth.mode.lower())
        except ValueError:
            allowed = ", ".join(m.value for m in AuthMode)
            msg = f"Invalid auth mode: {self.auth.mode}. Must be one of: {allowed}"
            raise ValueError(msg) from None

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_non_production(self) -> bool:
        """True for local, test and development, where API docs are served."""
        return self.APP_ENV in ("local", "test", "development")


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, loaded on first use."""
    return Settings()
