"""
Logging and metrics.
"""

from .logger import configure_logging, get_logger, log_operation, setup_logger

__all__ = [
    "get_logger",
    "setup_logger",
    "log_operation",
    "configure_logging",
]
