"""Provisioning API client + TTL credential cache.

Provisioning endpoint: POST /api/irc-user-provision
  Headers: Content-Type: application/json, Authorization: Bearer <token> (optional)

Response shape (2xx):
  { success: true, ircUsername, ircPassword, networkName }
Error shape (non-2xx):
  { error, details? }

The endpoint validates the host session, creates or updates the bouncer
account, and returns a fresh login for The Lounge.
"""

from __future__ import annotations

import time
from collections.abc import Callable

import httpx
from cachetools import TTLCache
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from lounge.core.constants import PROVISION_PATH
from lounge.core.errors import ProvisioningError
from lounge.provisioning.models import ProvisionedCredentials

# Transport failures only; HTTP error statuses are final
DEFAULT_RETRY = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type(
        (
            httpx.ConnectError,
            httpx.ConnectTimeout,
            httpx.ReadTimeout,
            httpx.WriteTimeout,
            httpx.PoolTimeout,
            httpx.ReadError,
            httpx.WriteError,
        )
    ),
    reraise=True,
)


def _error_text(resp: httpx.Response) -> str:
    """Error text from a failed response: JSON ``error`` field, else the status line."""
    fallback = f"HTTP {resp.status_code}: {resp.reason_phrase}"
    try:
        data = resp.json()
    except ValueError:
        return fallback
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return fallback


class ProvisioningClient:
    """Async client for the host's IRC provisioning endpoint. Uses tenacity for retries."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or "").rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}{PROVISION_PATH}"

    def _headers(self) -> dict[str, str]:
        h: dict[str, str] = {"Content-Type": "application/json"}
        if self._token:
            h["Authorization"] = f"Bearer {self._token}"
        return h

    @DEFAULT_RETRY
    async def _post(self) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            return await client.post(self.endpoint, headers=self._headers())

    async def provision(self) -> ProvisionedCredentials:
        """Create or refresh the IRC account and return its login.

        Raises ProvisioningError with an ``IRC provisioning failed: ...`` message.
        """
        logger.info("Starting IRC user provisioning...")
        try:
            resp = await self._post()
        except httpx.HTTPError as exc:
            logger.error("IRC provisioning error: {}", exc)
            raise ProvisioningError(
                f"IRC provisioning failed: {exc}",
                code="transport_error",
                original_error=exc,
            ) from exc

        logger.debug("IRC provisioning response: {}", resp.status_code)

        if not resp.is_success:
            text = _error_text(resp)
            logger.error("IRC provisioning failed: {}", text)
            raise ProvisioningError(
                f"IRC provisioning failed: {text}",
                status_code=resp.status_code,
                code="http_error",
            )

        try:
            credentials = ProvisionedCredentials.from_dict(resp.json())
        except ValueError as exc:
            raise ProvisioningError(
                "IRC provisioning failed: Invalid response format",
                status_code=resp.status_code,
                code="malformed_response",
                original_error=exc,
            ) from exc
        except ProvisioningError as exc:
            raise ProvisioningError(
                f"IRC provisioning failed: {exc.message}",
                status_code=resp.status_code,
                code=exc.code,
                details=exc.details,
            ) from exc

        if not credentials.success:
            raise ProvisioningError(
                "IRC provisioning failed: Invalid response format",
                status_code=resp.status_code,
                code="unsuccessful",
            )

        logger.info("IRC provisioning successful for {}", credentials.irc_username)
        return credentials


class CredentialResolver:
    """Credential cache with TTL. Wraps ProvisioningClient; failures are not cached."""

    def __init__(
        self,
        client: ProvisioningClient,
        *,
        maxsize: int = 256,
        ttl: float = 300,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._cache: TTLCache[str, ProvisionedCredentials] = TTLCache(
            maxsize=maxsize,
            ttl=ttl,
            timer=timer,
        )

    def _cache_key(self) -> str:
        return self._client.token or ""

    async def resolve(self) -> ProvisionedCredentials:
        """Cached credentials for the client's token; provisions on a miss."""
        key = self._cache_key()
        try:
            return self._cache[key]
        except KeyError:
            logger.debug("Credential cache miss")
            credentials = await self._client.provision()
            self._cache[key] = credentials
            return credentials

    def invalidate(self) -> None:
        """Drop the cached entry so the next resolve provisions again."""
        self._cache.pop(self._cache_key(), None)

    async def __call__(self) -> ProvisionedCredentials:
        return await self.resolve()
