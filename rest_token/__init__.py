"""Retrieve and refresh short-lived service tokens with Basic credentials."""

from .auth_token import RefreshOutcome, RefreshResult, TokenClient, TokenManager
from .config import TokenSettings, load_settings
from .errors import (
    ConfigurationError,
    HTTPStatusError,
    InternalError,
    RefreshTimeoutError,
    TransportError,
    UnauthorizedError,
)

__version__ = "1.0.0"

__all__ = [
    "TokenManager",
    "TokenClient",
    "RefreshOutcome",
    "RefreshResult",
    "TokenSettings",
    "load_settings",
    "InternalError",
    "TransportError",
    "RefreshTimeoutError",
    "HTTPStatusError",
    "UnauthorizedError",
    "ConfigurationError",
]
