"""
Utilities package for kvpool.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of domain-specific logic.
"""

from kvpool.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
