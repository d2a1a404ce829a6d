"""Result table and summary printed after lifecycle commands."""

from collections import Counter

from rich.markup import escape
from rich.table import Table

from pur.models.action import ActionResult
from pur.utils.formatting import console, print_success


def _outcome(result: ActionResult) -> tuple[str, str]:
    """Get the styled result cell and the details text of one result."""
    if result.success:
        return "[success]ok[/]", result.message or ""
    return "[error]failed[/]", result.error or "unknown error"


def create_results_table(results: list[ActionResult], title: str = "Results") -> Table:
    """Build a table with one row per action result.

    Args:
        results: Results in the order the actions ran.
        title: Table title.

    Returns:
        Table with Package, Version, Action, Result and Details columns.
    """
    table = Table(title=title, header_style="bold_header", border_style="border")
    table.add_column("Package", no_wrap=True)
    table.add_column("Version", style="muted")
    table.add_column("Action")
    table.add_column("Result", justify="center")
    table.add_column("Details", style="muted", overflow="fold")

    for result in results:
        outcome, details = _outcome(result)
        table.add_row(
            escape(result.package),
            escape(result.version),
            result.action_type.value,
            outcome,
            escape(details),
        )
    return table


def print_results_summary(results: list[ActionResult]) -> None:
    """Print how many actions succeeded and how many failed."""
    counts = Counter(result.success for result in results)
    if not counts[False]:
        print_success(f"{counts[True]} action(s) completed successfully.")
        return
    console.print(f"\n[success]{counts[True]} succeeded[/], [error]{counts[False]} failed[/]")
