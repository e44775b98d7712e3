"""Authentication provider models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthResult(BaseModel):
    """Verified identity of the caller.

    Produced by whichever provider checked the credential, so the rest of
    the application never depends on the token format.

    Attributes:
        user_id: Unique identifier of the user ('sub' claim).
        email: Email address, if the credential carries one.
        email_verified: Whether the identity provider verified the email.
        token_type: Kind of credential that was checked.
        issuer: Token issuer ('iss' claim).
        audience: Token audience(s) ('aud' claim).
        expires_at: Expiration timestamp ('exp' claim).
        issued_at: Issuance timestamp ('iat' claim).
        raw_claims: Original token claims.
    """

    user_id: str = Field(..., description="User identifier from token 'sub' claim")
    email: str | None = Field(default=None, description="User email")
    email_verified: bool = Field(default=False, description="Email verified flag")
    token_type: str = Field(default="id_token", description="Type of validated token")
    issuer: str | None = Field(default=None, description="Token issuer")
    audience: list[str] = Field(default_factory=list, description="Token audience")
    expires_at: int | None = Field(default=None, description="Expiration timestamp")
    issued_at: int | None = Field(default=None, description="Issuance timestamp")
    raw_claims: dict[str, Any] = Field(
        default_factory=dict,
        description="Original token claims",
    )

    model_config = {"frozen": True}


def audience_list(aud: str | list[str] | None) -> list[str]:
    """Normalize an 'aud' claim (string or list) into a list."""
    if not aud:
        return []
    if isinstance(aud, str):
        return [aud]
    return list(aud)
