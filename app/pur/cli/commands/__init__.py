"""CLI commands for pur.

This package contains all subcommand implementations.
"""

from pur.cli.commands import config, install, search, update

__all__ = ["config", "install", "search", "update"]
