"""
Configuration constants for the REST token manager

This module contains all configurable constants used throughout the package.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, logs a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is not None and value.strip():
        return value.strip()
    return default


# Token endpoint used when the caller does not supply one
DEFAULT_TOKEN_URL = _get_env_str(
    "REST_TOKEN_DEFAULT_URL",
    "https://stream.watsonplatform.net/authorization/api/v1/token",
)

# Query parameter carrying the downstream service URL
SERVICE_URL_QUERY_PARAM = "url"

# Total seconds allowed for one token request (connect + read)
TOKEN_REQUEST_TIMEOUT_SECONDS = _get_env_float("REST_TOKEN_REQUEST_TIMEOUT_SECONDS", 30.0)

# Consecutive refresh failures before failures are logged at ERROR
TOKEN_FAILURE_ESCALATION_THRESHOLD = _get_env_int(
    "REST_TOKEN_FAILURE_ESCALATION_THRESHOLD", 3
)

# Configuration file location
CONFIG_FILE_ENV = "REST_TOKEN_CONF_FILE"
DEFAULT_CONFIG_FILE = "rest_token.conf"
