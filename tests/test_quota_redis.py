"""Tests for the Redis quota store.

The Lua script runs server-side; these tests check the key layout, the
arguments handed to the script and how its reply is interpreted.
"""

from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from thumbsmith.core.errors import QuotaStoreUnavailable
from thumbsmith.models.domain import QuotaDecision
from thumbsmith.quota.fallback import FallbackQuotaStore
from thumbsmith.quota.redis_store import CHECK_AND_CONSUME_SCRIPT, RedisQuotaStore


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.register_script.return_value = MagicMock(return_value=[1, 1])
    return client


@pytest.fixture
def store(redis_client, clock) -> RedisQuotaStore:
    return RedisQuotaStore(limit=3, key_prefix="test:usage", clock=clock, client=redis_client)


class TestRedisQuotaStore:
    """Tests for RedisQuotaStore."""

    def test_registers_script(self, store, redis_client):
        redis_client.register_script.assert_called_once_with(CHECK_AND_CONSUME_SCRIPT)

    def test_script_is_atomic_check_then_increment(self):
        """Script compares before INCR and sets expiry on first use."""
        assert CHECK_AND_CONSUME_SCRIPT.index("current >= limit") < (
            CHECK_AND_CONSUME_SCRIPT.index("INCR")
        )
        assert "EXPIRE" in CHECK_AND_CONSUME_SCRIPT

    def test_key_and_args(self, store, redis_client):
        store.check_and_consume("1.2.3.4")
        script = redis_client.register_script.return_value
        script.assert_called_once_with(keys=["test:usage:2026-10-16:1.2.3.4"], args=[3, 12 * 3600])

    @pytest.mark.parametrize("count,remaining", [(1, 2), (2, 1), (3, 0)])
    def test_allowed_reply(self, store, redis_client, count, remaining):
        redis_client.register_script.return_value.return_value = [1, count]
        assert store.check_and_consume("a") == QuotaDecision(allowed=True, remaining=remaining)

    def test_rejected_reply(self, store, redis_client):
        redis_client.register_script.return_value.return_value = [0, 3]
        assert store.check_and_consume("a") == QuotaDecision(allowed=False, remaining=0)

    def test_window_in_key_follows_clock(self, store, redis_client, clock):
        clock.advance(days=1)
        store.check_and_consume("a")
        script = redis_client.register_script.return_value
        assert script.call_args.kwargs["keys"] == ["test:usage:2026-10-17:a"]

    def test_backend_error_wrapped(self, store, redis_client):
        redis_client.register_script.return_value.side_effect = RedisConnectionError("refused")
        with pytest.raises(QuotaStoreUnavailable):
            store.check_and_consume("a")

    def test_peek(self, store, redis_client):
        redis_client.get.return_value = "2"
        assert store.peek("a") == 1
        redis_client.get.assert_called_once_with("test:usage:2026-10-16:a")

    def test_peek_missing_key(self, store, redis_client):
        redis_client.get.return_value = None
        assert store.peek("a") == 3

    def test_ping_error_wrapped(self, store, redis_client):
        redis_client.ping.side_effect = RedisConnectionError("refused")
        with pytest.raises(QuotaStoreUnavailable):
            store.ping()

    def test_requires_url_or_client(self):
        with pytest.raises(ValueError):
            RedisQuotaStore(limit=3)

    def test_outage_falls_back_to_memory(self, store, redis_client):
        redis_client.register_script.return_value.side_effect = RedisConnectionError("refused")
        fallback = FallbackQuotaStore(store)
        assert fallback.check_and_consume("a") == QuotaDecision(allowed=True, remaining=2)
