"""Identity and window utilities for quota accounting.

- client_identity: rate-limiting key from the forwarded-address header
- window_key: UTC calendar-day string that scopes a usage counter
- seconds_until_window_end: TTL for store-native expiry
"""

from datetime import datetime, timedelta, timezone

UNKNOWN_IDENTITY = "unknown"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def client_identity(forwarded_for: str | None) -> str:
    """Derive the caller identity from an X-Forwarded-For header value.

    Takes the first entry of the comma-separated list. This is not
    authenticated and is trivially spoofable; it only keys the free-tier
    limiter.

    Args:
        forwarded_for: Raw header value, or None if absent.

    Returns:
        First forwarded address, or "unknown" when absent or blank.

    Examples:
        >>> client_identity("1.2.3.4, 10.0.0.1")
        '1.2.3.4'
        >>> client_identity(None)
        'unknown'
    """
    if not forwarded_for:
        return UNKNOWN_IDENTITY

    first = forwarded_for.split(",")[0].strip()
    return first or UNKNOWN_IDENTITY


def window_key(now: datetime) -> str:
    """Return the YYYY-MM-DD window string for a moment in time.

    Naive datetimes are treated as UTC.
    """
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%d")


def seconds_until_window_end(now: datetime) -> int:
    """Seconds left until the next UTC midnight, never less than 1."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    next_midnight = (now + timedelta(days=1)).replace(
        hour=0, minute=0, second=0, microsecond=0
    )
    return max(1, int((next_midnight - now).total_seconds()))
