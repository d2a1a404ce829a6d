"""Package repositories.

A repository is a directory whose immediate subdirectories are package
recipes. It may carry an executable ``update`` script that refreshes it
from upstream.
"""

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from pur.core.config import PurConfig, load_config
from pur.core.errors import NoUpdateScriptError, ParseError, UpdateScriptError
from pur.core.package import Package
from pur.core.paths import UPDATE_SCRIPT
from pur.core.version import is_newer
from pur.models.package import InstallData
from pur.utils.shell import spawn_script, wait_script

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[Package, InstallData], None]


class Repo:
    """A repository directory of package recipes.

    Attributes:
        dir: Repository directory.
    """

    def __init__(
        self,
        path: Path,
        db_dir: Path | None = None,
        root: Path | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            path: Repository directory.
            db_dir: Install database override passed to parsed packages.
            root: System root override passed to parsed packages.
        """
        self.dir = path
        self._db_dir = db_dir
        self._root = root

    def __repr__(self) -> str:
        return f"Repo({str(self.dir)!r})"

    @property
    def name(self) -> str:
        """Repository name, the directory's basename."""
        return self.dir.name

    @property
    def update_script(self) -> Path:
        """Path to the repository's update script."""
        return self.dir / UPDATE_SCRIPT

    def get_packages(self) -> list[Package]:
        """Parse every package recipe in the repository.

        Subdirectories that fail to parse are skipped. Nothing is cached,
        so each call re-reads the repository.

        Returns:
            Packages sorted by directory name. Empty if the repository
            directory cannot be read.
        """
        try:
            entries = sorted(self.dir.iterdir())
        except OSError as e:
            logger.debug("Cannot read repository %s: %s", self.dir, e)
            return []

        packages: list[Package] = []
        for entry in entries:
            if not entry.is_dir():
                continue
            try:
                packages.append(Package.from_dir(entry, db_dir=self._db_dir, root=self._root))
            except ParseError as e:
                logger.debug("Skipping %s: %s", entry, e)
        return packages

    def sync(self) -> None:
        """Run the repository's update script inside the repository.

        Raises:
            NoUpdateScriptError: If the repository has no update script.
            UpdateScriptError: If the script cannot run or exits nonzero.
        """
        script = self.update_script
        if not script.exists():
            raise NoUpdateScriptError(f"No update script in {self.dir}")

        logger.info("Running update script for %s", self.dir)
        try:
            process = spawn_script([script], cwd=self.dir)
            returncode = wait_script(process)
        except (OSError, subprocess.SubprocessError) as e:
            raise UpdateScriptError(f"Cannot run {script}") from e

        if returncode != 0:
            raise UpdateScriptError(f"{script} exited with status {returncode}")

    def update_repository(self, callback: UpdateCallback) -> None:
        """Refresh the repository and report installed packages with updates.

        Runs the update script, then invokes ``callback(package, data)`` for
        every installed package whose repository version is newer than the
        recorded one. A callback exception aborts the iteration.

        Args:
            callback: Called with the repository package and its install record.

        Raises:
            NoUpdateScriptError: If the repository has no update script.
            UpdateScriptError: If the update script fails.
        """
        self.sync()

        for package in self.get_packages():
            data = package.get_install_data(require_marker=True)
            if data is None:
                continue
            if is_newer(package.version, data.version):
                logger.debug(
                    "%s: repository has %s, installed %s",
                    package.name,
                    package.version,
                    data.version,
                )
                callback(package, data)


def get_repositories(config: PurConfig | None = None) -> list[Repo]:
    """Build Repo objects for the configured repository directories.

    The configuration is read once and its database and root directories
    are handed to every repository.

    Args:
        config: Configuration to use. If None, loads the effective one.

    Returns:
        One Repo per directory, in search order.

    Raises:
        ConfigError: If the configuration cannot be loaded.
    """
    config = config or load_config()
    return [Repo(path, db_dir=config.db_dir, root=config.root) for path in config.repos]


def get_all_packages(repositories: list[Repo]) -> list[Package]:
    """Collect the packages of every repository, in search order."""
    return [package for repo in repositories for package in repo.get_packages()]


def find_package(name: str, packages: list[Package]) -> Package | None:
    """Find the first package with the given name."""
    return next((p for p in packages if p.name == name), None)
