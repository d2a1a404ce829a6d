"""Utility modules for pur.

This module exports commonly used utility functions.
"""

from pur.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from pur.utils.shell import spawn_script, wait_script

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "spawn_script",
    "wait_script",
]
