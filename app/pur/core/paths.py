"""Path management for pur.

Resolves the install database and the system root used for projection
through the active configuration.

On-disk layout of one install record::

    <db_dir>/<pkg>/
        version      built version
        installed    zero-byte marker, present once projected
        files/       build sandbox
"""

from pathlib import Path

from pur.core.config import load_config

# Fixed names inside an install record
FILES_DIRNAME = "files"
VERSION_FILENAME = "version"
INSTALLED_MARKER = "installed"

# Sandbox subtrees projected into the system tree
PROJECTION_SUBTREES: tuple[str, ...] = (
    "usr/bin",
    "usr/lib",
    "usr/lib64",
    "usr/sbin",
    "usr/linuxrc",
)

# Names inside a repository / package recipe
INSTALL_SCRIPT = "install"
UPDATE_SCRIPT = "update"
DEPENDS_FILENAME = "depends"

__all__ = [
    "DEPENDS_FILENAME",
    "FILES_DIRNAME",
    "INSTALLED_MARKER",
    "INSTALL_SCRIPT",
    "PROJECTION_SUBTREES",
    "UPDATE_SCRIPT",
    "VERSION_FILENAME",
    "ensure_db_dir",
    "get_db_dir",
    "get_root_dir",
]


def get_db_dir() -> Path:
    """Get the install database directory.

    Returns:
        Path to /var/db/installed (or the configured override).
    """
    return load_config().db_dir


def get_root_dir() -> Path:
    """Get the system root that projection symlinks are written under.

    Returns:
        Path to / (or the configured override).
    """
    return load_config().root


def ensure_db_dir(db_dir: Path | None = None) -> Path:
    """Create the install database directory if it doesn't exist.

    Args:
        db_dir: Directory to create. If None, uses get_db_dir().

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = db_dir or get_db_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create install database {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create install database {path}: {e}"
        raise RuntimeError(msg) from e
    return path
