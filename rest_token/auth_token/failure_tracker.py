"""Bookkeeping of consecutive token refresh failures."""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field

from ..constants import TOKEN_FAILURE_ESCALATION_THRESHOLD


@dataclass
class FailureTracker:
    """Counts refresh failures since the last successful refresh.

    A single failure is logged as a warning; once ``escalate_after``
    refreshes in a row have failed, failures are logged as errors until a
    refresh succeeds again.

    Attributes:
        escalate_after: Consecutive failures that trigger escalation.
        consecutive: Failures since the last success.
        by_category: Failure counts per error category over the manager's life.
        last_success: Wall-clock time of the last successful refresh.
    """

    escalate_after: int = TOKEN_FAILURE_ESCALATION_THRESHOLD
    consecutive: int = 0
    by_category: Counter[str] = field(default_factory=Counter)
    last_success: float | None = None

    @property
    def escalated(self) -> bool:
        return self.consecutive >= max(self.escalate_after, 1)

    def record_failure(self, category: str) -> int:
        self.consecutive += 1
        self.by_category[category] += 1
        return self.consecutive

    def record_success(self) -> None:
        if self.consecutive:
            logging.info(
                f"🔁 Token refresh recovered after {self.consecutive} failure(s)"
            )
        self.consecutive = 0
        self.last_success = time.time()

    def log_level(self) -> int:
        return logging.ERROR if self.escalated else logging.WARNING
