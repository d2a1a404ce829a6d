"""Update command implementation.

Refreshes every configured repository and rebuilds installed packages
whose repository version is newer than the installed one.
"""

import typer

from pur.cli.display import create_results_table, print_results_summary
from pur.cli.types import load_repositories
from pur.core import executor
from pur.core.errors import NoUpdateScriptError, UpdateError, format_error_chain
from pur.models.action import ActionResult
from pur.utils.formatting import (
    console,
    print_debug_detail,
    print_error,
    print_info,
    print_warning,
)


def update_repositories() -> None:
    """Refresh repositories and update outdated packages.

    Repositories without an update script are skipped. A package that fails
    to update is reported without stopping the others; the command exits
    nonzero only if a repository's update script fails.
    """
    results: list[ActionResult] = []
    failed = False

    for repo in load_repositories():
        try:
            results.extend(executor.update(repo))
        except NoUpdateScriptError:
            print_warning(f"Repository {repo.dir} has no update script, skipping")
        except UpdateError as e:
            print_error(f"Failed to update repository {repo.dir}")
            print_debug_detail(format_error_chain(e))
            failed = True

    if results:
        console.print(create_results_table(results, title="Updates"))
        print_results_summary(results)
    else:
        print_info("All installed packages are up to date.")

    if failed:
        raise typer.Exit(code=1)
