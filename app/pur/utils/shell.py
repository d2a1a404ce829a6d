"""Script execution utilities.

Install and update scripts run as child processes that inherit the
terminal and environment, so their build output reaches the user directly.
"""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def spawn_script(
    args: list[str | Path],
    *,
    cwd: Path | None = None,
) -> subprocess.Popen[bytes]:
    """Start a script without capturing its output.

    Args:
        args: Script path followed by its arguments.
        cwd: Working directory for the child. The parent's working
            directory is left untouched.

    Returns:
        The running child process.

    Raises:
        FileNotFoundError: If the script does not exist.
        PermissionError: If the script is not executable.
        OSError: If the process cannot be spawned for any other reason.
    """
    logger.debug("Spawning %s (cwd=%s)", " ".join(str(a) for a in args), cwd)
    return subprocess.Popen([str(a) for a in args], cwd=cwd)


def wait_script(process: subprocess.Popen[bytes]) -> int:
    """Block until a spawned script exits.

    Args:
        process: Process returned by spawn_script().

    Returns:
        Exit code of the script.
    """
    returncode = process.wait()
    logger.debug("Process %s exited with %d", process.args, returncode)
    return returncode
