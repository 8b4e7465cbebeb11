"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE
from ..errors.internal import ConfigurationError
from .model import TokenSettings

# Environment variables overriding file values
ENV_OVERRIDES: dict[str, str] = {
    "REST_TOKEN_URL": "token_url",
    "REST_TOKEN_SERVICE_URL": "service_url",
    "REST_TOKEN_USERNAME": "username",
    "REST_TOKEN_PASSWORD": "password",
    "REST_TOKEN_TIMEOUT": "timeout",
}


def load_raw(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Load the raw settings mapping from a JSON file.

    A missing file yields an empty mapping so environment variables alone
    can supply the settings.

    Raises:
        ConfigurationError: If the file exists but is not a JSON object.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Configuration load error: {e}", data={"path": str(path)}
        ) from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration file must contain a JSON object", data={"path": str(path)}
        )
    return data


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    environ = os.environ if environ is None else environ
    return {
        field: environ[name]
        for name, field in ENV_OVERRIDES.items()
        if environ.get(name)
    }


def load_settings(
    path: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> TokenSettings:
    """Load and validate token settings.

    Values come from the JSON file at ``path`` (default: ``$REST_TOKEN_CONF_FILE``,
    falling back to ``rest_token.conf`` in the working directory) and are
    overridden by ``REST_TOKEN_*`` environment variables.

    Args:
        path: Optional path to a JSON settings file.
        environ: Environment mapping, defaults to ``os.environ``.

    Returns:
        Validated TokenSettings.

    Raises:
        ConfigurationError: If the file is unreadable or settings are invalid.
    """
    environ = os.environ if environ is None else environ
    if path is None:
        path = environ.get(CONFIG_FILE_ENV) or DEFAULT_CONFIG_FILE
    raw: dict[str, Any] = load_raw(Path(path))
    raw.update(env_overrides(environ))
    try:
        settings = TokenSettings.from_dict(raw)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ConfigurationError(
            f"Invalid token settings: {', '.join(fields)}", data={"fields": fields}
        ) from e
    logging.debug(
        f"⚙️ Token settings loaded service={settings.service_url} user={settings.username}"
    )
    return settings
