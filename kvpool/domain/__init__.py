"""
Domain package for kvpool.

Exposes retry policy models, the error taxonomy and the pool/logger protocols.
"""

from kvpool.domain.errors import (
    AcquireError,
    AcquireExhaustedError,
    BackendRejectedError,
    BuildError,
    InvalidDescriptorError,
    KvPoolError,
)
from kvpool.domain.models import (
    AnyRetryPolicy,
    ExponentialJitteredRetryPolicy,
    FixedRetryPolicy,
    RetryPolicy,
    retry_policy_from_settings,
)
from kvpool.domain.protocols import AcquireLogger, ConnectionPool, NullLogger

__all__ = [
    "AcquireError",
    "AcquireExhaustedError",
    "BackendRejectedError",
    "BuildError",
    "InvalidDescriptorError",
    "KvPoolError",
    "AnyRetryPolicy",
    "ExponentialJitteredRetryPolicy",
    "FixedRetryPolicy",
    "RetryPolicy",
    "retry_policy_from_settings",
    "AcquireLogger",
    "ConnectionPool",
    "NullLogger",
]
