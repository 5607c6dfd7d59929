"""
Infrastructure package for kvpool.

Centralizes Redis connectivity concerns: building bounded pools and checking
connections out of them with retry. Keep this layer focused on I/O and
resource management.
"""

from kvpool.infrastructure.acquirer import ResilientAcquirer, acquire
from kvpool.infrastructure.pool_factory import (
    PoolManager,
    RedisConnectionPool,
    build_pool,
    create_pool_from_settings,
    get_pool,
    redact_descriptor,
)

__all__ = [
    "ResilientAcquirer",
    "acquire",
    "PoolManager",
    "RedisConnectionPool",
    "build_pool",
    "create_pool_from_settings",
    "get_pool",
    "redact_descriptor",
]
