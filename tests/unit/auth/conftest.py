"""Auth unit test fixtures: an RSA key pair and a Firebase token minter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwk, jwt

from tests.factories import KEY_ID, firebase_claims


if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture(scope="session")
def rsa_private_pem() -> bytes:
    """Generate a throwaway RSA private key."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def public_jwk(rsa_private_pem: bytes) -> dict[str, Any]:
    """Public half of the key pair as a JWK, as Google publishes it."""
    private_key = serialization.load_pem_private_key(rsa_private_pem, password=None)
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    key = jwk.construct(public_pem, algorithm="RS256").to_dict()
    return {**key, "kid": KEY_ID, "use": "sig"}


@pytest.fixture
def mint_token(rsa_private_pem: bytes) -> Callable[..., str]:
    """Sign Firebase-shaped tokens with the test key."""

    def _mint(kid: str = KEY_ID, algorithm: str = "RS256", **overrides: Any) -> str:
        key: str | bytes = rsa_private_pem if algorithm == "RS256" else "shared"
        return jwt.encode(
            firebase_claims(**overrides),
            key,
            algorithm=algorithm,
            headers={"kid": kid},
        )

    return _mint
