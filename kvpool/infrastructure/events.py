"""
Fail-open emission of connection pool log events.

Every event is tagged with ``component="ConnectionPool"`` through `extra` so
the JSON formatter renders it as a structured field.
"""

from __future__ import annotations

from typing import Any

from kvpool.domain.protocols import AcquireLogger

COMPONENT = "ConnectionPool"


def emit(logger: AcquireLogger, level: str, msg: str, *args: Any, **fields: Any) -> None:
    """Log `msg` at `level`. Errors raised by the sink are discarded."""
    try:
        getattr(logger, level)(msg, *args, extra={"component": COMPONENT, **fields})
    except Exception:  # noqa: BLE001
        pass  # Logging must never interrupt acquisition


__all__ = ["COMPONENT", "emit"]
