"""Daily quota enforcement.

build_quota_store picks a backend from settings:
- no QUOTA_STORE_URL: MemoryQuotaStore (single process only)
- redis:// or rediss://: RedisQuotaStore
- any other URL: SqlQuotaStore via SQLAlchemy
Durable backends are wrapped in FallbackQuotaStore.
"""

from __future__ import annotations

import logging

from thumbsmith.config import Settings
from thumbsmith.core.errors import QuotaStoreUnavailable
from thumbsmith.quota.base import Clock, QuotaStore
from thumbsmith.quota.fallback import FallbackQuotaStore
from thumbsmith.quota.memory import MemoryQuotaStore

logger = logging.getLogger(__name__)

REDIS_SCHEMES = ("redis://", "rediss://")


def _build_durable_store(url: str, settings: Settings, clock: Clock | None) -> QuotaStore:
    if url.startswith(REDIS_SCHEMES):
        from thumbsmith.quota.redis_store import RedisQuotaStore

        return RedisQuotaStore(
            limit=settings.DAILY_FREE_LIMIT,
            url=url,
            token=settings.QUOTA_STORE_TOKEN,
            key_prefix=settings.QUOTA_KEY_PREFIX,
            clock=clock,
        )

    from thumbsmith.db.session import get_engine
    from thumbsmith.quota.sql_store import SqlQuotaStore

    return SqlQuotaStore(
        limit=settings.DAILY_FREE_LIMIT,
        engine=get_engine(url),
        clock=clock,
    )


def build_quota_store(settings: Settings, clock: Clock | None = None) -> QuotaStore:
    """Create the quota store described by settings.

    Args:
        settings: Service settings.
        clock: Optional time source, mainly for tests.

    Returns:
        A ready QuotaStore. Never raises for an unreachable backend; the
        returned store degrades to memory instead.
    """
    if not settings.QUOTA_STORE_URL:
        logger.warning(
            "QUOTA_STORE_URL not set; using in-memory quota store "
            "(not shared across instances, resets on restart)"
        )
        return MemoryQuotaStore(settings.DAILY_FREE_LIMIT, clock)

    try:
        primary = _build_durable_store(settings.QUOTA_STORE_URL, settings, clock)
    except QuotaStoreUnavailable as e:
        logger.warning(f"Durable quota store unavailable at start-up, using memory: {e}")
        return MemoryQuotaStore(settings.DAILY_FREE_LIMIT, clock)

    store = FallbackQuotaStore(primary)
    try:
        store.ping()
    except QuotaStoreUnavailable as e:
        logger.warning(f"Durable quota store not reachable yet: {e}")
    return store


__all__ = [
    "FallbackQuotaStore",
    "MemoryQuotaStore",
    "QuotaStore",
    "build_quota_store",
]
