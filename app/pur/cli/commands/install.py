"""Install, build and remove commands.

Each command takes one or more package names, resolves them against the
configured repositories and runs the lifecycle coordinator on them in
command-line order, stopping at the first failure.
"""

from typing import Annotated

import typer

from pur.cli.types import load_targets
from pur.core import executor
from pur.core.errors import ExecuteError

PackageNames = Annotated[
    list[str],
    typer.Argument(help="Package names.", show_default=False),
]


def install_packages(names: PackageNames) -> None:
    """Build packages if needed, then install them and their dependencies.

    Examples:
        pur install pfetch
        pur install curl git
    """
    targets, packages = load_targets(names)
    for package in targets:
        try:
            executor.install(package, packages)
        except ExecuteError as e:
            raise typer.Exit(code=1) from e


def build_packages(names: PackageNames) -> None:
    """Build packages without creating system symlinks.

    Dependencies are installed first, since they must be usable at build
    time.
    """
    targets, packages = load_targets(names)
    for package in targets:
        try:
            executor.build(package, packages)
        except ExecuteError as e:
            raise typer.Exit(code=1) from e


def remove_packages(names: PackageNames) -> None:
    """Remove package symlinks and their build sandboxes."""
    targets, packages = load_targets(names)
    for package in targets:
        try:
            executor.remove(package)
        except ExecuteError as e:
            raise typer.Exit(code=1) from e
