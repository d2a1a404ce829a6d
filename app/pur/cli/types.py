"""Shared types and helpers for CLI commands.

This module provides the output format enum and the repository/package
loading helpers used by several command modules.
"""

from enum import Enum

import typer

from pur.core.errors import ConfigError, PackageNotFoundError
from pur.core.package import Package
from pur.core.repo import Repo, find_package, get_all_packages, get_repositories
from pur.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def load_repositories() -> list[Repo]:
    """Load the configured repositories, exiting on a bad configuration."""
    try:
        return get_repositories()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def resolve_packages(names: list[str], packages: list[Package]) -> list[Package]:
    """Look up the packages named on the command line.

    Args:
        names: Package names in command-line order.
        packages: Every package known to the repositories.

    Returns:
        The matching packages, in the same order.

    Raises:
        PackageNotFoundError: If any name is not found.
    """
    resolved: list[Package] = []
    for name in names:
        package = find_package(name, packages)
        if package is None:
            raise PackageNotFoundError(f"Package not found in any repository: {name}")
        resolved.append(package)
    return resolved


def load_targets(names: list[str]) -> tuple[list[Package], list[Package]]:
    """Load every package and resolve the command-line names against them.

    Unknown names are reported before anything runs.

    Returns:
        Tuple of (requested packages in command-line order, every package).

    Raises:
        typer.Exit: If the configuration is invalid or a name is not found.
    """
    packages = get_all_packages(load_repositories())
    try:
        targets = resolve_packages(names, packages)
    except PackageNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return targets, packages
