"""Centralized internal error hierarchy.

These exceptions give token refresh failures semantic categories so callers
can decide what to do next. Raw aiohttp / asyncio errors never leave the
client layer; they are wrapped into one of these instead.

Classes:
  InternalError        – Base for all internal errors.
  TransportError       – Connection / DNS / TLS failure reaching the endpoint.
  RefreshTimeoutError  – The token endpoint did not answer in time.
  HTTPStatusError      – A response arrived with a non-2xx status.
  UnauthorizedError    – The endpoint rejected the credentials (401/403).
  ConfigurationError   – Settings are missing or invalid.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class TransportError(InternalError):
    """Exception raised when the token endpoint could not be reached.

    Covers DNS resolution, connection refusal/reset and TLS failures.
    """


class RefreshTimeoutError(TransportError):
    """Exception raised when the token endpoint does not respond in time."""


class HTTPStatusError(InternalError):
    """Exception raised when the token endpoint answers with a non-2xx status.

    Attributes:
        status: HTTP status code of the response.
        url: Request URL (without credentials).
    """

    def __init__(
        self,
        message: str,
        *,
        status: int,
        url: str | None = None,
        data: Mapping[str, object] | None = None,
    ) -> None:
        merged: dict[str, object] = {"status": status, "url": url}
        if data:
            merged.update(data)
        super().__init__(message, data=merged)
        self.status = status
        self.url = url


class UnauthorizedError(HTTPStatusError):
    """Exception raised when the endpoint rejects the Basic credentials."""


class ConfigurationError(InternalError):
    """Exception raised when token settings are missing or invalid."""


__all__ = [
    "InternalError",
    "TransportError",
    "RefreshTimeoutError",
    "HTTPStatusError",
    "UnauthorizedError",
    "ConfigurationError",
]
