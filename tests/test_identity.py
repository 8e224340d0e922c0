"""Tests for identity and window utilities."""

from datetime import datetime, timedelta, timezone

from thumbsmith.core.identity import (
    UNKNOWN_IDENTITY,
    client_identity,
    seconds_until_window_end,
    window_key,
)


class TestClientIdentity:
    """Tests for client_identity."""

    def test_single_address(self):
        assert client_identity("1.2.3.4") == "1.2.3.4"

    def test_first_entry_of_list(self):
        """Only the first forwarded address is used."""
        assert client_identity("1.2.3.4, 10.0.0.1, 10.0.0.2") == "1.2.3.4"

    def test_strips_whitespace(self):
        assert client_identity("  5.6.7.8  ,10.0.0.1") == "5.6.7.8"

    def test_missing_header_is_unknown(self):
        assert client_identity(None) == UNKNOWN_IDENTITY

    def test_blank_header_is_unknown(self):
        assert client_identity("") == "unknown"
        assert client_identity(" , 10.0.0.1") == "unknown"


class TestWindowKey:
    """Tests for window_key."""

    def test_formats_utc_date(self):
        now = datetime(2026, 10, 16, 23, 59, tzinfo=timezone.utc)
        assert window_key(now) == "2026-10-16"

    def test_converts_to_utc(self):
        """A local time past midnight UTC lands in the next UTC day."""
        tokyo = timezone(timedelta(hours=9))
        now = datetime(2026, 10, 17, 8, 0, tzinfo=tokyo)  # 23:00 UTC on the 16th
        assert window_key(now) == "2026-10-16"

    def test_naive_treated_as_utc(self):
        assert window_key(datetime(2026, 1, 2, 3, 4)) == "2026-01-02"


class TestSecondsUntilWindowEnd:
    """Tests for seconds_until_window_end."""

    def test_midday(self):
        now = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)
        assert seconds_until_window_end(now) == 12 * 3600

    def test_just_before_midnight_is_at_least_one(self):
        now = datetime(2026, 10, 16, 23, 59, 59, 999999, tzinfo=timezone.utc)
        assert seconds_until_window_end(now) == 1

    def test_at_midnight_is_full_day(self):
        now = datetime(2026, 10, 16, tzinfo=timezone.utc)
        assert seconds_until_window_end(now) == 86400
