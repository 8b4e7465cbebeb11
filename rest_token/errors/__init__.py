from .handling import log_error
from .internal import (
    ConfigurationError,
    HTTPStatusError,
    InternalError,
    RefreshTimeoutError,
    TransportError,
    UnauthorizedError,
)

__all__ = [
    "log_error",
    "InternalError",
    "TransportError",
    "RefreshTimeoutError",
    "HTTPStatusError",
    "UnauthorizedError",
    "ConfigurationError",
]
