"""Durable quota store with an in-memory safety net.

When the durable backend raises QuotaStoreUnavailable the call is served by a
process-local MemoryQuotaStore instead of failing the request. Counts taken
during an outage are advisory only: they are neither shared across instances
nor written back to the durable store.
"""

from __future__ import annotations

import logging

from thumbsmith.core.errors import QuotaStoreUnavailable
from thumbsmith.models.domain import QuotaDecision
from thumbsmith.quota.base import QuotaStore
from thumbsmith.quota.memory import MemoryQuotaStore

logger = logging.getLogger(__name__)


class FallbackQuotaStore(QuotaStore):
    """Delegates to a primary store, degrading to memory on backend errors."""

    def __init__(self, primary: QuotaStore, fallback: MemoryQuotaStore | None = None):
        super().__init__(primary.limit, primary.clock)
        self.primary = primary
        self.fallback = fallback or MemoryQuotaStore(primary.limit, primary.clock)

    def ping(self) -> None:
        self.primary.ping()

    def check_and_consume(self, identity: str) -> QuotaDecision:
        try:
            return self.primary.check_and_consume(identity)
        except QuotaStoreUnavailable as e:
            logger.warning(f"Quota store unavailable, using in-memory counter: {e}")
            return self.fallback.check_and_consume(identity)

    def peek(self, identity: str) -> int:
        try:
            return self.primary.peek(identity)
        except QuotaStoreUnavailable as e:
            logger.warning(f"Quota store unavailable, using in-memory counter: {e}")
            return self.fallback.peek(identity)
