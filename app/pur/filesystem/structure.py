"""Per-package install file structure.

An InstallFileStructure owns the sandbox layout of one package below
``<db_dir>/<id>/files`` and its projection into the system tree::

    <db_dir>/<id>/files/usr/bin/tool      (sandbox file)
    <root>/usr/bin/<id>/tool  ->  sandbox file   (projection symlink)

Projection and withdrawal walk the same sandbox enumeration, so every
symlink created by symlink_out_scope() is removed by remove_symlinks().
"""

import logging
import os
import shutil
from collections.abc import Iterator
from pathlib import Path

from pur.core.errors import (
    FileCopyError,
    SymLinkError,
    file_structure_error,
)
from pur.core.paths import FILES_DIRNAME, PROJECTION_SUBTREES, get_db_dir, get_root_dir
from pur.filesystem.walker import walk

logger = logging.getLogger(__name__)

# Symlink creation is stubbed out on non-POSIX platforms
SYMLINKS_SUPPORTED = os.name == "posix"


def _symlink(source: Path, target: Path) -> None:
    """Create ``target`` pointing at ``source``; a no-op off POSIX."""
    if not SYMLINKS_SUPPORTED:
        return
    target.symlink_to(source)


class InstallFileStructure:
    """Sandbox skeleton and symlink projection for one package.

    Attributes:
        id: Package name the structure belongs to.
        parent: Sandbox root, ``<db_dir>/<id>/files``.
        root: System root the projection is written under.
    """

    def __init__(
        self,
        package_id: str,
        db_dir: Path | None = None,
        root: Path | None = None,
    ) -> None:
        """Initialize the structure.

        Args:
            package_id: Package name.
            db_dir: Install database directory. Defaults to the configured one.
            root: System root. Defaults to the configured one.
        """
        self.id = package_id
        self.parent = (db_dir or get_db_dir()) / package_id / FILES_DIRNAME
        self.root = root or get_root_dir()

    def __repr__(self) -> str:
        return f"InstallFileStructure(id={self.id!r}, parent={str(self.parent)!r})"

    def get_paths(self) -> list[Path]:
        """List every directory create_all() produces, children first."""
        paths = [self.parent / child for child in PROJECTION_SUBTREES]
        paths.append(self.parent)
        paths.append(self.parent.parent)
        return paths

    def get_children(self) -> list[tuple[Path, str]]:
        """List (sandbox path, subtree name) pairs for the projection subtrees."""
        return [(self.parent / child, child) for child in PROJECTION_SUBTREES]

    def projection_dir(self, child: str) -> Path:
        """Get the system directory a subtree is projected into.

        Args:
            child: Subtree name, e.g. ``usr/bin``.

        Returns:
            Path to ``<root>/<child>/<id>``.
        """
        return self.root / child / self.id

    def iter_projection(self) -> Iterator[tuple[Path, Path]]:
        """Yield (sandbox file, symlink target) for every projected file.

        Subtrees missing from the sandbox are skipped. The target keeps the
        file's path relative to its subtree, so ``files/usr/lib/x/libx.so``
        maps to ``<root>/usr/lib/<id>/x/libx.so``.
        """
        for path, child in self.get_children():
            if not path.is_dir():
                logger.debug("%s does not exist, skipping", path)
                continue

            files: list[Path] = []
            walk(path, files.append)
            target_dir = self.projection_dir(child)
            for file in files:
                yield file, target_dir / file.relative_to(path)

    def create_all(self) -> None:
        """Create the sandbox skeleton, skipping directories that exist.

        Raises:
            FileStructureError: If a directory cannot be created.
        """
        for path in self.get_paths():
            if path.is_dir():
                continue
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise file_structure_error(e, f"Cannot create {path}") from e

    def delete_all(self) -> None:
        """Remove every path create_all() produces, skipping missing ones.

        Raises:
            FileStructureError: If a path cannot be removed.
        """
        for path in self.get_paths():
            if not path.exists():
                continue
            try:
                shutil.rmtree(path)
            except OSError as e:
                raise file_structure_error(e, f"Cannot delete {path}") from e

    def symlink_out_scope(self) -> None:
        """Project every sandbox file into the system tree.

        Existing symlinks that already point at the same sandbox file are
        left alone, so the projection can be repeated safely.

        Raises:
            SymLinkError: If any symlink cannot be created.
        """
        try:
            for source, target in self.iter_projection():
                if target.is_symlink() and Path(os.readlink(target)) == source:
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                _symlink(source, target)
                logger.debug("Linked %s -> %s", target, source)
        except OSError as e:
            raise file_structure_error(
                e, f"Cannot project {self.id} into {self.root}", SymLinkError
            ) from e

    def remove_symlinks(self) -> None:
        """Withdraw the projection created by symlink_out_scope().

        Targets that no longer exist are ignored. Directories under
        ``<root>/<child>/<id>`` left empty by the withdrawal are pruned.

        Raises:
            FileStructureError: If a symlink or directory cannot be removed.
        """
        try:
            for _, target in self.iter_projection():
                if target.is_symlink() or target.exists():
                    target.unlink()
                    logger.debug("Unlinked %s", target)
                self._prune_empty(target.parent)
        except OSError as e:
            raise file_structure_error(e, f"Cannot withdraw {self.id} from {self.root}") from e

    def move_all(self, target: Path) -> None:
        """Copy each existing sandbox subtree to the same place under ``target``.

        Args:
            target: Destination root; ``files/usr/bin`` lands in ``target/usr/bin``.

        Raises:
            FileCopyError: If a subtree cannot be copied.
        """
        for path, child in self.get_children():
            if not path.exists():
                continue
            try:
                shutil.copytree(path, target / child, symlinks=True, dirs_exist_ok=True)
            except (OSError, shutil.Error) as e:
                raise FileCopyError(f"Cannot copy {path} to {target / child}: {e}") from e

    def _prune_empty(self, directory: Path) -> None:
        """Remove empty directories from ``directory`` up to its projection dir."""
        for child in PROJECTION_SUBTREES:
            stop = self.projection_dir(child)
            if directory == stop or stop in directory.parents:
                break
        else:
            return

        current = directory
        while True:
            if current.is_dir() and not any(current.iterdir()):
                current.rmdir()
            if current == stop:
                return
            current = current.parent
