from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ..logging_config import log_structured_error
from .internal import (
    ConfigurationError,
    HTTPStatusError,
    InternalError,
    TransportError,
    UnauthorizedError,
)


def classify_error(error: BaseException) -> str:
    """Map an exception onto the error category used for aggregation.

    Args:
        error: The exception to classify.

    Returns:
        One of ``network``, ``auth``, ``http``, ``config``, ``internal`` or
        ``unknown``.
    """
    if isinstance(error, TransportError | aiohttp.ClientError | OSError | TimeoutError):
        return "network"
    if isinstance(error, UnauthorizedError):
        return "auth"
    if isinstance(error, HTTPStatusError):
        return "http"
    if isinstance(error, ConfigurationError):
        return "config"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(
    message: str,
    error: BaseException,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Logs an error message with the associated exception details.

    The exception is categorized and forwarded to the structured logger,
    which also records it in the error aggregator.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
        level: Logging level (default: ERROR).
    """
    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
        level=level,
    )
