"""Logging utilities."""

from .utils import (
    format_args,
    safe_repr,
    setup_file_logger,
    teardown_file_logger,
)

__all__ = [
    "format_args",
    "safe_repr",
    "setup_file_logger",
    "teardown_file_logger",
]
