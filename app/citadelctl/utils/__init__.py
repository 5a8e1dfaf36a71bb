"""Utility modules for citadelctl.

This module exports commonly used utility functions.
"""

from citadelctl.utils.formatting import (
    console,
    create_addon_table,
    err_console,
    format_addon_row,
    print_error,
    print_info,
    print_success,
    print_warning,
    setup_logging,
)

__all__ = [
    "console",
    "create_addon_table",
    "err_console",
    "format_addon_row",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "setup_logging",
]
