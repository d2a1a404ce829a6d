"""Unit tests for the main CLI application."""

import logging
from collections.abc import Iterator

import pytest
from pur import __version__
from pur.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_level() -> Iterator[None]:
    """Undo the log level set by the main callback."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


class TestMain:
    """Tests for global options and command registration."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"pur version {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        """Every command is registered."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("install", "build", "remove", "update", "search", "config"):
            assert command in result.output

    def test_verbose_enables_debug_logging(self, make_package) -> None:
        """--verbose sets the root logger to DEBUG."""
        make_package("pfetch")

        result = runner.invoke(app, ["--verbose", "search"])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_quiet_limits_logging(self) -> None:
        """--quiet only lets errors through."""
        result = runner.invoke(app, ["--quiet", "search"])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.ERROR
