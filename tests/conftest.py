"""Shared pytest fixtures for thumbsmith tests."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from thumbsmith.config import Settings
from thumbsmith.core.origin import OriginGuard
from thumbsmith.db.schema import Base
from thumbsmith.gateway.orchestrator import GenerationGateway
from thumbsmith.providers.mock import MockProvider
from thumbsmith.quota.memory import MemoryQuotaStore


class FakeClock:
    """Settable clock for window tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at midday UTC."""
    return FakeClock(datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def settings() -> Settings:
    """Settings with a credential and an in-memory quota store."""
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-test",
        QUOTA_STORE_URL=None,
        SITE_URL="https://thumbsmith.example",
        DEV_URL="http://localhost:3000",
        DAILY_FREE_LIMIT=3,
    )


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryQuotaStore:
    return MemoryQuotaStore(limit=3, clock=clock)


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def gateway(mock_provider, memory_store, settings) -> GenerationGateway:
    """Gateway wired to the mock provider and in-memory quota."""
    return GenerationGateway(
        provider=mock_provider,
        quota_store=memory_store,
        origin_guard=OriginGuard(settings.allowed_origins),
    )
