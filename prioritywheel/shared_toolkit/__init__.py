"""
Shared Toolkit - common helpers of the Priority Wheel application:
- Logging setup for GUI and CLI entry points
"""

from .core import get_log_directory, setup_logging

__all__ = [
    "get_log_directory",
    "setup_logging",
]
