"""Utility modules for turbomd.

Provides:
- logger: get_logger, configure_logging
"""

from turbomd.utils.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
