"""Tests for build_quota_store backend selection."""

from unittest.mock import MagicMock

import redis

from thumbsmith.config import Settings
from thumbsmith.quota import build_quota_store
from thumbsmith.quota.fallback import FallbackQuotaStore
from thumbsmith.quota.memory import MemoryQuotaStore
from thumbsmith.quota.redis_store import RedisQuotaStore
from thumbsmith.quota.sql_store import SqlQuotaStore


def make_settings(**overrides) -> Settings:
    values = {"OPENAI_API_KEY": "sk-test", "QUOTA_STORE_URL": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestBuildQuotaStore:
    """Tests for build_quota_store."""

    def test_no_url_uses_memory(self, caplog):
        with caplog.at_level("WARNING"):
            store = build_quota_store(make_settings())
        assert isinstance(store, MemoryQuotaStore)
        assert "not shared across instances" in caplog.text

    def test_limit_from_settings(self):
        store = build_quota_store(make_settings(DAILY_FREE_LIMIT=5))
        assert store.limit == 5

    def test_sql_url(self, tmp_path, clock):
        url = f"sqlite:///{tmp_path / 'quota.db'}"
        store = build_quota_store(make_settings(QUOTA_STORE_URL=url), clock=clock)
        assert isinstance(store, FallbackQuotaStore)
        assert isinstance(store.primary, SqlQuotaStore)
        assert store.check_and_consume("a").remaining == 2

    def test_redis_url(self, monkeypatch):
        client = MagicMock()
        from_url = MagicMock(return_value=client)
        monkeypatch.setattr(redis.Redis, "from_url", from_url)

        settings = make_settings(
            QUOTA_STORE_URL="rediss://default@cache.example:6379",
            QUOTA_STORE_TOKEN="secret-token",
        )
        store = build_quota_store(settings)

        assert isinstance(store, FallbackQuotaStore)
        assert isinstance(store.primary, RedisQuotaStore)
        assert from_url.call_args.args == ("rediss://default@cache.example:6379",)
        assert from_url.call_args.kwargs["password"] == "secret-token"
        client.ping.assert_called_once()
