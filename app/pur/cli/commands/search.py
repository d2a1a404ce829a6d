"""Search command implementation.

Lists packages from the configured repositories with their version and
lifecycle status.
"""

import json
from typing import Annotated

import typer

from pur.cli.types import OutputFormat
from pur.core.errors import ConfigError
from pur.core.package import Package
from pur.core.repo import Repo, get_repositories
from pur.models.package import PackageStatus
from pur.utils.formatting import (
    console,
    create_package_table,
    package_row,
    print_info,
    print_warning,
)


def _matches(
    package: Package,
    status: PackageStatus,
    installed_only: bool,
    prefix: str | None,
) -> bool:
    """Check a package against the search filters."""
    if installed_only and status != PackageStatus.INSTALLED:
        return False
    return prefix is None or package.name.startswith(prefix)


def search_packages(
    installed: Annotated[
        bool,
        typer.Option(
            "--installed",
            "-i",
            help="Only list installed packages.",
        ),
    ] = False,
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Only list packages whose name starts with this prefix.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Search packages in the local repositories.

    Examples:
        pur search              # every package
        pur search -i           # installed packages only
        pur search -n py        # names starting with "py"
    """
    try:
        repositories = get_repositories()
    except ConfigError as e:
        print_warning(str(e))
        return

    rows: list[tuple[Repo, Package, PackageStatus]] = []
    for repo in repositories:
        for package in repo.get_packages():
            status = package.status()
            if _matches(package, status, installed, name):
                rows.append((repo, package, status))

    if output_format == OutputFormat.JSON:
        data = [
            {
                "name": package.name,
                "version": package.version,
                "status": status.value,
                "repository": str(repo.dir),
                "depends": package.depends,
            }
            for repo, package, status in rows
        ]
        console.print_json(json.dumps(data))
        return

    if not rows:
        print_info("No packages found.")
        return

    table = create_package_table("Installed Packages" if installed else "Packages")
    for repo, package, status in rows:
        table.add_row(*package_row(package.name, package.version, status, repo.name))
    console.print(table)
