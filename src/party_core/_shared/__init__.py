# Area: Shared
"""
Shared utilities used by the host, the CLI and the core.

This package contains:
- Logging configuration
- Event bus trace output
"""

from .logging_config import setup_logging, log_core_error
from .event_logger import EventLogger

__all__ = [
    "setup_logging",
    "log_core_error",
    "EventLogger",
]
