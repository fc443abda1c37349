"""Utility modules for saplex.

Provides:
- logger: get_logger for logging
"""

from saplex.utils.logger import get_logger

__all__ = ["get_logger"]
