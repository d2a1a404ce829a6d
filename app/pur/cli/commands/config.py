"""Configuration commands.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from pur.core.config import PurConfig, get_config_path, load_config, save_config
from pur.core.errors import ConfigError
from pur.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialise the pur configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration, including environment overrides."""
    try:
        config = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    path = get_config_path()
    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("config file", f"{path}" + ("" if path.exists() else " [muted](missing)[/]"))
    table.add_row("db_dir", str(config.db_dir))
    table.add_row("root", str(config.root))
    table.add_row("repos", "\n".join(str(repo) for repo in config.repos) or "-")

    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default configuration file."""
    path = get_config_path()
    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        saved = save_config(PurConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default configuration to {saved}")
