"""Command-line interface; ``app`` is the console-script entry point."""

from pur.cli.main import app

__all__ = ["app"]
