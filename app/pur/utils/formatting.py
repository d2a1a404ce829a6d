"""Console output helpers shared by the commands and the executor.

Progress and results go to stdout; warnings, errors and debug details go
to stderr so that ``pur search --format json`` stays machine readable.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pur.core.theme import get_theme

if TYPE_CHECKING:
    from pur.models.package import PackageStatus


def _make_console(*, stderr: bool = False) -> Console:
    color_system = "truecolor" if sys.stdout.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)

_PACKAGE_COLUMNS: tuple[tuple[str, dict[str, object]], ...] = (
    ("Package", {"no_wrap": True}),
    ("Version", {"style": "muted"}),
    ("Status", {"min_width": 9}),
    ("Repository", {"style": "muted"}),
)


def create_package_table(title: str = "Packages") -> Table:
    """Create an empty package listing.

    Rows are expected in the shape returned by package_row().

    Args:
        title: Table title.

    Returns:
        Table with Package, Version, Status and Repository columns.
    """
    table = Table(title=title, header_style="bold_header", border_style="border")
    for header, options in _PACKAGE_COLUMNS:
        table.add_column(header, **options)  # type: ignore[arg-type]
    return table


def format_status(status: PackageStatus) -> str:
    """Wrap a status in the theme style of the same name."""
    return f"[{status.value}]{status.value}[/]"


def package_row(name: str, version: str, status: PackageStatus, repository: str) -> tuple[str, ...]:
    """Build one listing row, escaping the free-text cells."""
    return (escape(name), escape(version), format_status(status), escape(repository))


def print_info(message: str) -> None:
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_debug_detail(detail: str) -> None:
    """Print an error chain as-is, with no markup or highlighting."""
    err_console.print(detail, markup=False, highlight=False, style="muted")
