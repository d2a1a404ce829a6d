"""Allow running pur as ``python -m pur``."""

from pur.cli.main import app

app()
