"""Redis-backed quota store.

The check, increment and expiry run as one Lua script on the server, so the
read-modify-write is atomic across every instance that shares the Redis.
Keys expire at the end of the UTC day.
"""

from __future__ import annotations

import logging

import redis
from redis.exceptions import RedisError

from thumbsmith.core.errors import QuotaStoreUnavailable
from thumbsmith.core.identity import seconds_until_window_end
from thumbsmith.models.domain import QuotaDecision
from thumbsmith.quota.base import Clock, QuotaStore

logger = logging.getLogger(__name__)

# KEYS[1] = counter key; ARGV[1] = limit; ARGV[2] = ttl seconds
# Returns {allowed (0|1), count after the call}
CHECK_AND_CONSUME_SCRIPT = """
local current = tonumber(redis.call('GET', KEYS[1]) or '0')
local limit = tonumber(ARGV[1])
if current >= limit then
    return {0, current}
end
current = redis.call('INCR', KEYS[1])
if current == 1 then
    redis.call('EXPIRE', KEYS[1], tonumber(ARGV[2]))
end
return {1, current}
"""


class RedisQuotaStore(QuotaStore):
    """Fixed-window counter in Redis.

    Args:
        limit: Allowed requests per identity per window.
        url: redis:// or rediss:// connection URL.
        token: Optional password (e.g. a hosted Redis REST/TLS token).
        key_prefix: Prefix for counter keys.
        clock: Time source.
        client: Pre-built redis client; overrides url/token.
    """

    def __init__(
        self,
        limit: int,
        url: str | None = None,
        token: str | None = None,
        key_prefix: str = "thumbsmith:usage",
        clock: Clock | None = None,
        client: redis.Redis | None = None,
    ):
        super().__init__(limit, clock)
        if client is None:
            if url is None:
                raise ValueError("RedisQuotaStore needs a url or a client")
            client = redis.Redis.from_url(
                url,
                password=token,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
        self.client = client
        self.key_prefix = key_prefix
        self._check_and_consume = self.client.register_script(CHECK_AND_CONSUME_SCRIPT)

    def _key(self, identity: str, window: str) -> str:
        return f"{self.key_prefix}:{window}:{identity}"

    def ping(self) -> None:
        try:
            self.client.ping()
        except RedisError as e:
            raise QuotaStoreUnavailable(f"Redis quota store unreachable: {e}") from e

    def check_and_consume(self, identity: str) -> QuotaDecision:
        now = self.clock()
        key = self._key(identity, self.current_window())
        ttl = seconds_until_window_end(now)

        try:
            allowed, count = self._check_and_consume(keys=[key], args=[self.limit, ttl])
        except RedisError as e:
            raise QuotaStoreUnavailable(f"Redis quota check failed: {e}") from e

        if not int(allowed):
            return QuotaDecision(allowed=False, remaining=0)
        return self._decision(int(count))

    def peek(self, identity: str) -> int:
        key = self._key(identity, self.current_window())
        try:
            value = self.client.get(key)
        except RedisError as e:
            raise QuotaStoreUnavailable(f"Redis quota read failed: {e}") from e

        count = int(value) if value is not None else 0
        return max(0, self.limit - count)
