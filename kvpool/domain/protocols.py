"""
Interfaces the acquirer depends on.

The acquirer only needs a pool that hands out connections or raises, and an
optional sink for leveled log messages. `logging.Logger` satisfies
`AcquireLogger` as-is; `NullLogger` is the default when nothing is injected.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ConnectionPool(Protocol):
    """
    Bounded, task-safe pool of reusable connections.

    Attributes
    ----------
    max_connections : int
        Capacity of the pool; outstanding checkouts never exceed it.
    """

    max_connections: int

    async def get_connection(self) -> Any:
        """
        Check out a connection, waiting at most the pool's own timeout.

        Raises
        ------
        Exception
            Any failure (pool exhausted, backend unreachable, timeout).
        """
        ...

    async def release(self, connection: Any) -> None:
        """Return a previously checked-out connection to the pool."""
        ...


@runtime_checkable
class AcquireLogger(Protocol):
    """Leveled logging capability, structurally compatible with `logging.Logger`."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


class NullLogger:
    """Discards every message."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        pass


__all__ = ["ConnectionPool", "AcquireLogger", "NullLogger"]
