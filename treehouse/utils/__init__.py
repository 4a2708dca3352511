"""Shared utilities for Buddy's Treehouse."""

from treehouse.utils.logging import get_logger, log_error, log_operation, setup_logging

__all__ = [
    "get_logger",
    "log_error",
    "log_operation",
    "setup_logging",
]
