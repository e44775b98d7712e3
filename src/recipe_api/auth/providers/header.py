"""Identity from trusted request headers.

No credential is checked: whoever can reach the service can claim any
identity. Refused in production by the provider factory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_api.auth.providers.exceptions import AuthenticationError
from recipe_api.auth.providers.models import AuthResult
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


class HeaderAuthProvider:
    """Extracts user id and email from request headers.

    If the user id header is missing, authentication fails. The email
    header is optional.

    Attributes:
        user_id_header: Header name containing the user id (required).
        email_header: Header name containing the user email.
    """

    def __init__(
        self,
        user_id_header: str = "X-User-ID",
        email_header: str = "X-User-Email",
    ) -> None:
        self.user_id_header = user_id_header
        self.email_header = email_header

    @property
    def provider_name(self) -> str:
        """Short name used in logs."""
        return "header"

    async def validate_token(
        self,
        _token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Build the identity from request headers; the token is ignored.

        Raises:
            AuthenticationError: If request is None or user id header is missing.
        """
        if request is None:
            msg = "HeaderAuthProvider requires request object for header access"
            raise AuthenticationError(msg)

        user_id = request.headers.get(self.user_id_header)
        if not user_id:
            msg = f"Missing required header: {self.user_id_header}"
            raise AuthenticationError(msg)

        email = request.headers.get(self.email_header) or None

        logger.debug("Authenticated via headers", user_id=user_id, has_email=bool(email))

        return AuthResult(
            user_id=user_id,
            email=email,
            email_verified=False,
            token_type="header",  # noqa: S106 - not a password
            raw_claims={
                "source": "headers",
                "user_id_header": self.user_id_header,
            },
        )

    async def initialize(self) -> None:
        """Log the header names in use."""
        logger.info(
            "HeaderAuthProvider initialized",
            user_id_header=self.user_id_header,
            email_header=self.email_header,
        )
        logger.warning(
            "Header authentication trusts X-User-ID as sent; never expose this "
            "deployment publicly"
        )

    async def shutdown(self) -> None:
        """Nothing to release."""
        logger.debug("HeaderAuthProvider shutdown")
