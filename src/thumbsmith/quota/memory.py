"""Process-local quota store.

Counts live in a dict guarded by a lock. They reset when the process
restarts and are not shared between processes or instances, so this store is
only suitable for single-process development, tests, and as the degraded
fallback when the durable store is down. Do not rely on it in a
multi-instance deployment.
"""

from __future__ import annotations

import threading

from thumbsmith.models.domain import QuotaDecision
from thumbsmith.quota.base import Clock, QuotaStore


class MemoryQuotaStore(QuotaStore):
    """In-memory fixed-window counter keyed by (identity, window)."""

    def __init__(self, limit: int, clock: Clock | None = None):
        super().__init__(limit, clock)
        self._counts: dict[tuple[str, str], int] = {}
        self._lock = threading.Lock()

    def _prune(self, window: str) -> None:
        """Drop counters from earlier windows. Caller holds the lock."""
        stale = [key for key in self._counts if key[1] != window]
        for key in stale:
            del self._counts[key]

    def check_and_consume(self, identity: str) -> QuotaDecision:
        window = self.current_window()
        key = (identity, window)

        with self._lock:
            self._prune(window)
            count = self._counts.get(key, 0)
            if count >= self.limit:
                return QuotaDecision(allowed=False, remaining=0)
            count += 1
            self._counts[key] = count

        return self._decision(count)

    def peek(self, identity: str) -> int:
        window = self.current_window()
        with self._lock:
            count = self._counts.get((identity, window), 0)
        return max(0, self.limit - count)
