"""Logging setup for applications using the token manager.

The package logs through the root logger. ``configure_logging`` installs a
colored stderr handler for it; ``log_structured_error`` is the single place
refresh failures are formatted, with credentials masked.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from typing import Any, TextIO

import colorlog

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "magenta",
}

# Context keys whose values never reach a log line
SENSITIVE_KEYS = frozenset({"password", "token", "authorization"})
MASK = "***"


def debug_requested(environ: Mapping[str, str] | None = None) -> bool:
    environ = os.environ if environ is None else environ
    return environ.get("DEBUG", "").lower() in ("true", "1", "yes")


def configure_logging(
    level: int | None = None, stream: TextIO | None = None
) -> logging.Handler:
    """Install a colorlog handler on the root logger.

    Calling it again replaces the handler installed by the previous call
    instead of stacking another one.

    Args:
        level: Log level; defaults to DEBUG when ``$DEBUG`` is truthy, else INFO.
        stream: Output stream, stderr by default.

    Returns:
        The installed handler.
    """
    if level is None:
        level = logging.DEBUG if debug_requested() else logging.INFO

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", log_colors=LOG_COLORS
        )
    )
    handler.rest_token_handler = True  # type: ignore[attr-defined]

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "rest_token_handler", False):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
    # aiohttp client internals are noisy at DEBUG
    logging.getLogger("aiohttp").setLevel(max(level, logging.INFO))
    return handler


def mask_context(context: Mapping[str, Any]) -> dict[str, Any]:
    return {
        k: MASK if k.lower() in SENSITIVE_KEYS else v for k, v in context.items()
    }


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: Mapping[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log an error as ``[TYPE] message | Exception: ... | Context: k=v``.

    Args:
        error_type: Category of the error (e.g. 'network', 'auth', 'http').
        message: Descriptive error message.
        exception: The exception that occurred, if any.
        context: Extra key/value pairs; sensitive keys are masked.
        level: Logging level (default: ERROR).
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception:
        parts.append(f"Exception: {type(exception).__name__}: {str(exception)}")
    if context:
        pairs = ", ".join(f"{k}={v}" for k, v in mask_context(context).items())
        parts.append(f"Context: {pairs}")
    logging.log(level, " | ".join(parts))
