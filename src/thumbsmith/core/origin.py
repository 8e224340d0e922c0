"""Origin allow-list check.

A CSRF deterrent for browser callers, not an authentication mechanism. The
gateway runs it before quota consumption so forged cross-origin calls cannot
spend a legitimate user's quota.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class OriginGuard:
    """Checks the Origin header against a fixed allow-list.

    - Absent Origin header: allowed (same-origin or non-browser caller).
    - Empty allow-list: allowed. Fails open on misconfiguration.
    - Otherwise the origin must match an allow-list entry exactly, ignoring
      a trailing slash.
    """

    def __init__(self, allowed_origins: Iterable[str]):
        self.allowed_origins = frozenset(
            origin.rstrip("/") for origin in allowed_origins if origin
        )
        if not self.allowed_origins:
            logger.warning("Origin allow-list is empty; all origins will be accepted")

    def is_allowed(self, origin: str | None) -> bool:
        if not origin:
            return True
        if not self.allowed_origins:
            return True
        return origin.rstrip("/") in self.allowed_origins
