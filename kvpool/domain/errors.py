"""
Error taxonomy for kvpool.

Only build-time errors and terminal acquisition errors cross the package
boundary. Transient checkout failures are absorbed by the acquirer and only
surface as the cause of `AcquireExhaustedError`.
"""

from __future__ import annotations

from typing import Optional


class KvPoolError(Exception):
    """Base class for all kvpool errors."""


class BuildError(KvPoolError):
    """Pool construction failed. Configuration problem, never retried."""

    def __init__(self, message: str, descriptor: Optional[str] = None) -> None:
        super().__init__(message)
        self.descriptor = descriptor


class InvalidDescriptorError(BuildError):
    """The connection descriptor could not be parsed."""


class BackendRejectedError(BuildError):
    """The Redis client refused to build a pool from the descriptor."""


class AcquireError(KvPoolError):
    """A connection could not be checked out of the pool."""


class AcquireExhaustedError(AcquireError):
    """Every attempt in the retry budget failed."""

    def __init__(self, attempts: int, last_failure: Optional[BaseException]) -> None:
        reason = _describe(last_failure)
        super().__init__(f"Connection checkout failed after {attempts} attempt(s): {reason}")
        self.attempts = attempts
        self.last_failure = last_failure

    @property
    def reason(self) -> str:
        return _describe(self.last_failure)


def _describe(exc: Optional[BaseException]) -> str:
    if exc is None:
        return "unknown failure"
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


__all__ = [
    "KvPoolError",
    "BuildError",
    "InvalidDescriptorError",
    "BackendRejectedError",
    "AcquireError",
    "AcquireExhaustedError",
]
