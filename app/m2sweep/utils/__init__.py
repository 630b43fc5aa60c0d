"""Utility modules for m2sweep.

This module exports commonly used utility functions.
"""

from m2sweep.utils.formatting import (
    console,
    err_console,
    format_binary_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "format_binary_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
