from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, SecretStr, field_validator

from ..constants import DEFAULT_TOKEN_URL, TOKEN_REQUEST_TIMEOUT_SECONDS


class TokenSettings(BaseModel):
    """Settings needed to obtain a token for one service.

    Attributes:
        token_url: URL of the token-issuing endpoint.
        service_url: URL of the service the token is scoped to.
        username: Basic-auth username.
        password: Basic-auth password (kept out of reprs and logs).
        timeout: Total seconds allowed for one token request.
    """

    token_url: str = DEFAULT_TOKEN_URL
    service_url: str
    username: str
    password: SecretStr
    timeout: float = Field(default=TOKEN_REQUEST_TIMEOUT_SECONDS, gt=0)

    @field_validator("token_url", "service_url", "username", mode="before")
    @classmethod
    def strip_required(cls, v: Any) -> str:
        """Strip whitespace and reject empty values."""
        if not isinstance(v, str):
            raise ValueError("must be a string")
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be empty")
        return stripped

    @field_validator("token_url", "service_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        if not v.lower().startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("must not be empty")
        return v

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TokenSettings:
        """Create TokenSettings from a dictionary, ignoring unknown keys and nulls.

        Args:
            data: Dictionary containing settings data.

        Returns:
            TokenSettings instance.
        """
        known = {
            k: v
            for k, v in data.items()
            if k in cls.model_fields and v is not None
        }
        return cls(**known)
