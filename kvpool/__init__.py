"""
kvpool - Resilient connection acquisition for Redis connection pools.

This package builds bounded, asyncio-friendly Redis connection pools and
checks connections out of them under a configurable retry/backoff policy:

- Fixed-interval retries for short, predictable windows (startup races)
- Exponential backoff with full jitter for steady-state operation
- Scoped checkout that always returns the connection to the pool
- Optional, fail-open logging of every attempt

Configuration is read from the environment (and `.env`) via Pydantic Settings.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from kvpool.config import Settings, get_settings
from kvpool.domain.errors import (
    AcquireError,
    AcquireExhaustedError,
    BackendRejectedError,
    BuildError,
    InvalidDescriptorError,
    KvPoolError,
)
from kvpool.domain.models import (
    ExponentialJitteredRetryPolicy,
    FixedRetryPolicy,
    RetryPolicy,
    retry_policy_from_settings,
)
from kvpool.domain.protocols import AcquireLogger, ConnectionPool, NullLogger
from kvpool.infrastructure.acquirer import ResilientAcquirer, acquire
from kvpool.infrastructure.pool_factory import (
    PoolManager,
    RedisConnectionPool,
    build_pool,
    create_pool_from_settings,
    get_pool,
    redact_descriptor,
)
from kvpool.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Pool building
    "PoolManager",
    "RedisConnectionPool",
    "build_pool",
    "create_pool_from_settings",
    "get_pool",
    "redact_descriptor",
    # Acquisition
    "ResilientAcquirer",
    "acquire",
    # Retry policies
    "ExponentialJitteredRetryPolicy",
    "FixedRetryPolicy",
    "RetryPolicy",
    "retry_policy_from_settings",
    # Protocols
    "AcquireLogger",
    "ConnectionPool",
    "NullLogger",
    # Errors
    "KvPoolError",
    "BuildError",
    "InvalidDescriptorError",
    "BackendRejectedError",
    "AcquireError",
    "AcquireExhaustedError",
    # Logging
    "configure_logging",
    "get_logger",
]
