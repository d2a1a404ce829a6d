"""Depth-first walk over the files below a directory."""

from collections.abc import Callable
from pathlib import Path

Visitor = Callable[[Path], None]


def walk(root: Path, visitor: Visitor) -> None:
    """Invoke ``visitor`` for every file reachable under ``root``.

    Directories are descended into depth-first, entries in name order.
    A symlink to a regular file is visited like the file itself, so
    aliases such as ``libz.so -> libz.so.1.2`` are kept. Symlinks to
    directories are never descended into, and dangling symlinks and
    other entry types (sockets, fifos, devices) are ignored. An exception
    raised by the visitor aborts the walk and propagates; files already
    visited are not revisited or undone.

    Args:
        root: Directory to walk.
        visitor: Callback receiving each file path.

    Raises:
        OSError: If a directory cannot be read.
    """
    for path in sorted(root.iterdir()):
        if path.is_dir():
            if not path.is_symlink():
                walk(path, visitor)
        elif path.is_file():
            visitor(path)
