"""Core utilities for the bookstore associations API.

This module exports commonly used utilities for easy importing:
    from core import get_logger
"""

from core.logger import get_logger

__all__ = [
    "get_logger",
]
