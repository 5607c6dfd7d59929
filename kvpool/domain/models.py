"""
Retry policy models for kvpool.

A retry policy is a pure description of how many checkout attempts to make
and how long to wait between them. Two shapes are supported and exposed as a
tagged union on `kind`, so the acquisition loop never needs to know which one
is active: it only asks the policy for the delay that follows a failed attempt.
"""
from __future__ import annotations

import abc
import random
from typing import TYPE_CHECKING, Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from kvpool.config import Settings

DEFAULT_MAX_DELAY_SECONDS = 300.0


class _BaseRetryPolicy(BaseModel, abc.ABC):
    attempts: int = Field(..., ge=1, description="Attempt budget, including the first try.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    @abc.abstractmethod
    def delay(self, index: int, rng: Optional[random.Random] = None) -> float:
        """Delay slept after failed attempt ``index + 1`` (zero-based index)."""

    def schedule(self, rng: Optional[random.Random] = None) -> List[float]:
        """
        Full delay sequence, one entry per attempt.

        The acquirer sleeps entry ``i`` only after attempt ``i + 1`` fails and
        another attempt remains, so the last entry is never slept: worst-case
        added latency is ``sum(schedule()[:-1])``, not ``sum(schedule())``.
        """
        return [self.delay(index, rng) for index in range(self.attempts)]


class FixedRetryPolicy(_BaseRetryPolicy):
    """
    Constant delay between attempts.

    Suits short, predictable retry windows such as pool warm-up races at startup.
    """

    kind: Literal["fixed"] = "fixed"
    delay_seconds: float = Field(..., ge=0, description="Delay between attempts.")

    @classmethod
    def from_millis(cls, millis: float, attempts: int) -> "FixedRetryPolicy":
        return cls(attempts=attempts, delay_seconds=millis / 1000.0)

    def delay(self, index: int, rng: Optional[random.Random] = None) -> float:
        return self.delay_seconds


class ExponentialJitteredRetryPolicy(_BaseRetryPolicy):
    """
    Doubling delay caps with full jitter.

    Each realized delay is drawn uniformly from ``[0, base * 2**i]``, with the
    cap clamped to ``max_delay_seconds``. Keep ``attempts`` small in steady
    state so a struggling backend is not hammered.
    """

    kind: Literal["exponential_jittered"] = "exponential_jittered"
    base_delay_seconds: float = Field(..., ge=0, description="Cap of the first delay.")
    max_delay_seconds: float = Field(
        DEFAULT_MAX_DELAY_SECONDS, ge=0, description="Upper bound of any single cap."
    )

    @classmethod
    def from_millis(cls, base_millis: float, attempts: int) -> "ExponentialJitteredRetryPolicy":
        return cls(attempts=attempts, base_delay_seconds=base_millis / 1000.0)

    def cap(self, index: int) -> float:
        """Pre-jitter upper bound of the delay after attempt ``index + 1``."""
        if self.base_delay_seconds == 0:
            return 0.0
        try:
            cap = self.base_delay_seconds * 2**index
        except OverflowError:
            return self.max_delay_seconds
        return min(cap, self.max_delay_seconds)

    def caps(self) -> List[float]:
        return [self.cap(index) for index in range(self.attempts)]

    def delay(self, index: int, rng: Optional[random.Random] = None) -> float:
        return (rng or random).uniform(0.0, self.cap(index))


AnyRetryPolicy = Union[FixedRetryPolicy, ExponentialJitteredRetryPolicy]

RetryPolicy = Annotated[AnyRetryPolicy, Field(discriminator="kind")]


def retry_policy_from_settings(settings: "Settings") -> AnyRetryPolicy:
    """
    Build the retry policy selected by `RETRY_POLICY`.

    `RETRY_DELAY_MS` is the constant delay for the fixed policy and the base
    delay for the exponential one.
    """
    if settings.retry_policy == "exponential_jittered":
        return ExponentialJitteredRetryPolicy.from_millis(
            settings.retry_delay_ms, attempts=settings.retry_attempts
        )
    return FixedRetryPolicy.from_millis(settings.retry_delay_ms, attempts=settings.retry_attempts)


__all__ = [
    "AnyRetryPolicy",
    "FixedRetryPolicy",
    "ExponentialJitteredRetryPolicy",
    "RetryPolicy",
    "retry_policy_from_settings",
]
