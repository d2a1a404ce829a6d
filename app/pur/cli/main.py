"""The pur command: global options, logging setup and command table."""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from pur import __version__
from pur.cli.commands import config, install, search, update
from pur.utils.formatting import err_console

app = typer.Typer(
    name="pur",
    help="Source-based package manager.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Handle --version before any command runs."""
    if value:
        typer.echo(f"pur version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route log records through Rich on stderr."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=verbose)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Print the pur version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug messages, including each spawned script.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
) -> None:
    """pur - source-based package manager.

    Builds packages from local repositories into /var/db/installed and
    links their binaries into the system tree.
    """
    _configure_logging(verbose, quiet)


app.command("install")(install.install_packages)
app.command("build")(install.build_packages)
app.command("remove")(install.remove_packages)
app.command("update")(update.update_repositories)
app.command("search")(search.search_packages)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
