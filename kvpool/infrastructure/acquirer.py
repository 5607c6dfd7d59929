"""
Resilient connection checkout for kvpool.

Borrows a connection from a pool, retrying transient failures according to a
`RetryPolicy` until a checkout succeeds or the attempt budget is spent. The
retry loop is driven by tenacity; the policy only contributes the attempt
budget and the delay after each failed attempt, computed when the loop
reaches it, so swapping backoff shapes never touches the loop itself.

Usage:
    acquirer = ResilientAcquirer(logger=get_logger(__name__))
    policy = ExponentialJitteredRetryPolicy.from_millis(10, attempts=3)

    async with acquirer.acquire(pool, policy) as conn:
        ...
"""

from __future__ import annotations

import asyncio
import random
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from tenacity import AsyncRetrying, RetryCallState, RetryError, retry_if_exception_type, stop_after_attempt

from kvpool.domain.errors import AcquireExhaustedError
from kvpool.domain.models import AnyRetryPolicy
from kvpool.domain.protocols import AcquireLogger, ConnectionPool, NullLogger
from kvpool.infrastructure.events import emit

SleepFunc = Callable[[float], Awaitable[Any]]


def _wait_from_policy(
    policy: AnyRetryPolicy, rng: Optional[random.Random]
) -> Callable[[RetryCallState], float]:
    """Tenacity wait strategy asking the policy for the delay after attempt i."""

    def wait(retry_state: RetryCallState) -> float:
        return policy.delay(retry_state.attempt_number - 1, rng)

    return wait


class ResilientAcquirer:
    """
    Check out connections with retry and guaranteed release.

    The acquirer is stateless between calls: each `acquire` asks the policy for its
    own delays and keeps no memory of previous outcomes.

    Parameters
    ----------
    logger : AcquireLogger | None
        Sink for attempt/failure/exhaustion events. Defaults to a no-op.
    sleep : callable
        Awaitable used between attempts. Must not block the event loop.
    rng : random.Random | None
        Source of jitter for randomized policies.
    """

    def __init__(
        self,
        logger: Optional[AcquireLogger] = None,
        *,
        sleep: SleepFunc = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._logger: AcquireLogger = logger or NullLogger()
        self._sleep = sleep
        self._rng = rng

    def _log_attempt(self, retry_state: RetryCallState, attempts: int) -> None:
        emit(
            self._logger,
            "debug",
            "Connection checkout attempt %d/%d",
            retry_state.attempt_number,
            attempts,
            attempt=retry_state.attempt_number,
            attempts=attempts,
        )

    def _log_failure(self, retry_state: RetryCallState, attempts: int) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        reason = f"{type(exc).__name__}: {exc}" if exc is not None else "unknown"
        emit(
            self._logger,
            "warning",
            "Connection checkout attempt %d/%d failed: %s",
            retry_state.attempt_number,
            attempts,
            reason,
            attempt=retry_state.attempt_number,
            attempts=attempts,
            reason=reason,
        )

    async def checkout(self, pool: ConnectionPool, policy: AnyRetryPolicy) -> Any:
        """
        Check out a raw connection. The caller must `pool.release` it.

        Prefer `acquire`, which releases on every exit path.

        Raises
        ------
        AcquireExhaustedError
            If every attempt in the policy's budget failed.
        """
        attempts = policy.attempts
        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=_wait_from_policy(policy, self._rng),
            retry=retry_if_exception_type(Exception),
            sleep=self._sleep,
            before=lambda state: self._log_attempt(state, attempts),
            after=lambda state: self._log_failure(state, attempts),
            reraise=False,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await pool.get_connection()
        except RetryError as exc:
            last_failure = exc.last_attempt.exception()
            error = AcquireExhaustedError(attempts, last_failure)
            emit(
                self._logger,
                "error",
                "Connection checkout exhausted after %d attempt(s): %s",
                attempts,
                error.reason,
                attempts=attempts,
                reason=error.reason,
            )
            raise error from last_failure

    @asynccontextmanager
    async def acquire(self, pool: ConnectionPool, policy: AnyRetryPolicy) -> AsyncIterator[Any]:
        """
        Scoped checkout: yields a connection and always returns it to the pool.

        Example
        -------
            async with acquirer.acquire(pool, policy) as conn:
                await conn.send_command("PING")
        """
        connection = await self.checkout(pool, policy)
        try:
            yield connection
        finally:
            # Shielded so a cancellation arriving here cannot leak the lease.
            await asyncio.shield(pool.release(connection))


def acquire(
    pool: ConnectionPool,
    policy: AnyRetryPolicy,
    logger: Optional[AcquireLogger] = None,
) -> Any:
    """
    Convenience wrapper around `ResilientAcquirer(logger).acquire`.

    Returns an async context manager yielding the checked-out connection.
    """
    return ResilientAcquirer(logger).acquire(pool, policy)


__all__ = ["ResilientAcquirer", "acquire"]
