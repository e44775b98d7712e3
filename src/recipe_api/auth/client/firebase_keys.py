"""HTTP client for Google's Firebase token signing keys.

Firebase ID tokens are signed with rotating RSA keys published as a JWK set.
This client downloads that set with httpx, keeps it in memory for the
lifetime advertised by the ``Cache-Control: max-age`` header, and refreshes
it once when a token names a key id it has not seen.
"""

from __future__ import annotations

import asyncio
import re
import time
from typing import Any

import httpx

from recipe_api.auth.providers.exceptions import AuthServiceUnavailableError
from recipe_api.observability.logging import get_logger


logger = get_logger(__name__)

_MAX_AGE_PATTERN = re.compile(r"max-age=(\d+)")


def parse_max_age(cache_control: str | None) -> int | None:
    """Extract ``max-age`` seconds from a Cache-Control header value."""
    if not cache_control:
        return None
    match = _MAX_AGE_PATTERN.search(cache_control)
    return int(match.group(1)) if match else None


class FirebaseKeyClient:
    """Async cache of Firebase signing keys indexed by ``kid``.

    Attributes:
        jwks_url: URL of the JWK set.
        timeout: HTTP request timeout in seconds.
        default_ttl: Cache lifetime used when the response has no max-age.
    """

    def __init__(
        self,
        jwks_url: str,
        timeout: float = 5.0,
        default_ttl: int = 3600,
    ) -> None:
        self.jwks_url = jwks_url
        self.timeout = timeout
        self.default_ttl = default_ttl
        self._http_client: httpx.AsyncClient | None = None
        self._keys: dict[str, dict[str, Any]] = {}
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    @property
    def is_fresh(self) -> bool:
        """Whether the cached key set is still within its lifetime."""
        return bool(self._keys) and time.monotonic() < self._expires_at

    async def initialize(self) -> None:
        """Initialize the HTTP client with connection pooling."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            limits=httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
            ),
        )
        logger.info(
            "FirebaseKeyClient initialized",
            jwks_url=self.jwks_url,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("FirebaseKeyClient shutdown")

    async def get_key(self, kid: str) -> dict[str, Any] | None:
        """Return the public JWK with the given key id.

        Downloads the key set when the cache is stale, and forces one
        extra download when ``kid`` is unknown to a fresh cache.

        Returns:
            The JWK, or None if no published key has that id.

        Raises:
            AuthServiceUnavailableError: If the key endpoint cannot be reached.
        """
        if not self.is_fresh:
            await self._refresh(force=False)

        key = self._keys.get(kid)
        if key is not None:
            return key

        logger.debug("Unknown signing key id, refreshing key set", kid=kid)
        await self._refresh(force=True, wanted_kid=kid)
        return self._keys.get(kid)

    async def _refresh(self, *, force: bool, wanted_kid: str | None = None) -> None:
        async with self._lock:
            # Another request may have refreshed while this one waited
            if not force and self.is_fresh:
                return
            if force and wanted_kid is not None and wanted_kid in self._keys:
                return

            keys, ttl = await self._fetch()
            self._keys = keys
            self._expires_at = time.monotonic() + ttl
            logger.info("Firebase signing keys refreshed", key_count=len(keys), ttl=ttl)

    async def _fetch(self) -> tuple[dict[str, dict[str, Any]], int]:
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        try:
            response = await self._http_client.get(self.jwks_url)
            response.raise_for_status()
            payload = response.json()

        except httpx.TimeoutException as e:
            logger.exception(
                "Firebase key endpoint timeout",
                url=self.jwks_url,
                timeout=self.timeout,
            )
            msg = f"Key endpoint timeout after {self.timeout}s"
            raise AuthServiceUnavailableError(msg) from e

        except httpx.HTTPStatusError as e:
            logger.exception(
                "Firebase key endpoint returned an error",
                status_code=e.response.status_code,
                url=self.jwks_url,
            )
            msg = f"Key endpoint returned {e.response.status_code}"
            raise AuthServiceUnavailableError(msg) from e

        except httpx.RequestError as e:
            logger.exception(
                "Firebase key endpoint connection error",
                url=self.jwks_url,
                error=str(e),
            )
            msg = f"Cannot connect to key endpoint: {e}"
            raise AuthServiceUnavailableError(msg) from e

        except ValueError as e:
            msg = "Key endpoint returned a malformed key set"
            raise AuthServiceUnavailableError(msg) from e

        keys = {
            key["kid"]: key
            for key in payload.get("keys", [])
            if isinstance(key, dict) and key.get("kid")
        }
        ttl = parse_max_age(response.headers.get("cache-control")) or self.default_ttl
        return keys, ttl
