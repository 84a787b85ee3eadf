"""
Utilities package for fieldgen.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of resolution logic.
"""

from fieldgen.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
