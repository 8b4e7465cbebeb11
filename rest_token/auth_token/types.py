"""Shared result types for the auth_token module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RefreshOutcome(str, Enum):
    """Enumeration of possible outcomes from a token refresh.

    Attributes:
        REFRESHED: A new token was retrieved and stored.
        FAILED: The refresh failed; the previous token (if any) is retained.
    """

    REFRESHED = "refreshed"
    FAILED = "failed"


@dataclass(frozen=True)
class RefreshResult:
    """Result of a single token refresh.

    Attributes:
        outcome: The outcome of the operation.
        token: The retrieved token on success, None on failure.
        error: The error describing a failure, None on success.
    """

    outcome: RefreshOutcome
    token: str | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == RefreshOutcome.REFRESHED

    @classmethod
    def success(cls, token: str) -> RefreshResult:
        return cls(RefreshOutcome.REFRESHED, token, None)

    @classmethod
    def failure(cls, error: Exception) -> RefreshResult:
        return cls(RefreshOutcome.FAILED, None, error)
