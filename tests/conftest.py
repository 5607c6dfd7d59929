"""
Pytest configuration for kvpool.

Provides fixtures for:
- In-process fake connection pools with capacity accounting
- A recording sleep to observe retry delays without waiting
- Settings override and Redis availability for integration tests
"""

from __future__ import annotations

import asyncio
import itertools
import os
from typing import List, Optional

import pytest
import redis
from redis.exceptions import ConnectionError as RedisConnectionError

from kvpool.config import Settings


class FakeConnection:
    _ids = itertools.count(1)

    def __init__(self) -> None:
        self.id = next(self._ids)

    def __repr__(self) -> str:
        return f"FakeConnection({self.id})"


class FakePool:
    """
    Bounded pool double satisfying the ConnectionPool protocol.

    The first `failures` checkouts raise (every checkout when `failures` is
    None). A checkout beyond capacity raises like an exhausted Redis pool.
    """

    def __init__(self, capacity: int = 5, failures: Optional[int] = 0) -> None:
        self.max_connections = capacity
        self.calls = 0
        self.in_use = 0
        self.peak_in_use = 0
        self.released: List[FakeConnection] = []
        self._failures_left = failures

    async def get_connection(self) -> FakeConnection:
        self.calls += 1
        await asyncio.sleep(0)
        if self._failures_left is None:
            raise RedisConnectionError("backend unreachable")
        if self._failures_left > 0:
            self._failures_left -= 1
            raise RedisConnectionError("backend unreachable")
        if self.in_use >= self.max_connections:
            raise RedisConnectionError("No connection available.")
        self.in_use += 1
        self.peak_in_use = max(self.peak_in_use, self.in_use)
        return FakeConnection()

    async def release(self, connection: FakeConnection) -> None:
        self.in_use -= 1
        self.released.append(connection)


class RecordingSleep:
    """Async sleep replacement that records requested delays and returns at once."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(float(delay))


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool()


@pytest.fixture
def make_pool():
    """Factory for FakePool with custom capacity/failure count."""
    return FakePool


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        redis_pool_max_connections=5,
        redis_pool_timeout_seconds=0.5,
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def redis_available(test_settings: Settings) -> bool:
    """
    Check if Redis is reachable.

    Used to conditionally skip integration tests when Redis is not available.
    """
    try:
        client = redis.Redis.from_url(test_settings.redis_url, socket_connect_timeout=1)
        try:
            client.ping()
        finally:
            client.close()
        return True
    except Exception:
        return False


@pytest.fixture
def redis_url(test_settings: Settings, redis_available: bool) -> str:
    """Redis URL for integration tests; skips when the server is unreachable."""
    if not redis_available:
        pytest.skip("Redis not available for integration tests")
    return test_settings.redis_url
