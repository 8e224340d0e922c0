"""Base quota store interface.

A quota store owns the fixed-window usage counters. Its one mutating
operation is check_and_consume, which must be atomic: two concurrent calls
for the same identity can never both pass when only one unit is left.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime

from thumbsmith.core.identity import utc_now, window_key
from thumbsmith.models.domain import QuotaDecision

Clock = Callable[[], datetime]


class QuotaStore(ABC):
    """Abstract base class for daily quota stores.

    Args:
        limit: Allowed requests per identity per window.
        clock: Returns the current time; the UTC date selects the window.
    """

    def __init__(self, limit: int, clock: Clock | None = None):
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        self.limit = limit
        self.clock = clock or utc_now

    def current_window(self) -> str:
        return window_key(self.clock())

    @abstractmethod
    def check_and_consume(self, identity: str) -> QuotaDecision:
        """Consume one unit for identity if any remain in the current window.

        Returns:
            QuotaDecision. When the limit is already reached, allowed is
            False, remaining is 0 and nothing is mutated.
        """
        pass

    @abstractmethod
    def peek(self, identity: str) -> int:
        """Return units remaining for identity without consuming any."""
        pass

    def ping(self) -> None:
        """Verify the backend is reachable. Raises QuotaStoreUnavailable."""
        return None

    def _decision(self, count: int) -> QuotaDecision:
        return QuotaDecision(allowed=True, remaining=max(0, self.limit - count))
