from .client import TokenClient, build_refresh_url
from .failure_tracker import FailureTracker
from .manager import TokenManager
from .types import RefreshOutcome, RefreshResult

__all__ = [
    "TokenClient",
    "FailureTracker",
    "TokenManager",
    "RefreshOutcome",
    "RefreshResult",
    "build_refresh_url",
]
