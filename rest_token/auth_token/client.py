"""Token retrieval HTTP client."""

from __future__ import annotations

import asyncio
import logging

import aiohttp
from yarl import URL

from ..constants import SERVICE_URL_QUERY_PARAM, TOKEN_REQUEST_TIMEOUT_SECONDS
from ..errors.internal import (
    HTTPStatusError,
    RefreshTimeoutError,
    TransportError,
    UnauthorizedError,
)


def build_refresh_url(token_url: str, service_url: str) -> URL:
    """Derive the token request URL for a service.

    The service URL is added to whatever query the token URL already carries;
    neither input is modified, so repeated calls always produce the same URL.

    Args:
        token_url: Base URL of the token-issuing endpoint.
        service_url: URL of the service the token is scoped to.

    Returns:
        The request URL with ``url=<service_url>`` in its query string.
    """
    return URL(token_url).update_query({SERVICE_URL_QUERY_PARAM: service_url})


class TokenClient:
    """Client for retrieving tokens from a Basic-auth protected endpoint.

    Handles the HTTP request and maps transport and status failures onto the
    internal error hierarchy.
    """

    def __init__(
        self,
        username: str,
        password: str,
        http_session: aiohttp.ClientSession,
        timeout: float = TOKEN_REQUEST_TIMEOUT_SECONDS,
    ):
        """Initialize the token client.

        Args:
            username: Basic-auth username.
            password: Basic-auth password.
            http_session: HTTP session for making requests.
            timeout: Total seconds allowed for one request.
        """
        self._auth = aiohttp.BasicAuth(username, password)
        self.session = http_session
        self.timeout = timeout

    @property
    def username(self) -> str:
        return self._auth.login

    async def fetch(self, url: URL | str) -> str:
        """Retrieve a token with a single authenticated GET.

        Args:
            url: Fully built request URL (see ``build_refresh_url``).

        Returns:
            The response body decoded as text; may be empty.

        Raises:
            UnauthorizedError: On HTTP 401/403.
            HTTPStatusError: On any other non-2xx status.
            RefreshTimeoutError: If the endpoint does not answer in time.
            TransportError: On connection, DNS or TLS failures.
        """
        safe_url = str(url)
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with asyncio.timeout(self.timeout):
                async with self.session.get(
                    url, auth=self._auth, timeout=timeout
                ) as resp:
                    return await self._read_token(resp, safe_url)
        except TimeoutError as e:
            raise RefreshTimeoutError(
                f"Token refresh timeout after {self.timeout}s",
                data={"url": safe_url, "timeout": self.timeout},
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(
                f"Network error during token refresh: {type(e).__name__}: {e}",
                data={"url": safe_url},
            ) from e

    async def _read_token(self, resp: aiohttp.ClientResponse, safe_url: str) -> str:
        """Return the body of a 2xx response or raise for its status."""
        if 200 <= resp.status < 300:
            token = await resp.text(errors="replace")
            logging.debug(
                f"🔑 Token response received status={resp.status} user={self.username} length={len(token)}"
            )
            return token
        if resp.status in (401, 403):
            raise UnauthorizedError(
                f"Token endpoint rejected credentials (HTTP {resp.status})",
                status=resp.status,
                url=safe_url,
            )
        raise HTTPStatusError(
            f"HTTP {resp.status} during token refresh",
            status=resp.status,
            url=safe_url,
        )
