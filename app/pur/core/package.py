"""Package entity and its per-package lifecycle.

A Package is parsed from a repository recipe directory holding
``version``, ``depends`` and an executable ``install`` script. It drives
its own InstallFileStructure through build, install, update and
uninstall.
"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from pur.core.errors import (
    FailedInstallScriptError,
    FileStructureError,
    LinkError,
    MetadataWritingError,
    NoDependsError,
    NoDirectoryError,
    NoInstallScriptError,
    NotInstalledError,
    NoVersionError,
    OtherParseError,
)
from pur.core.paths import (
    DEPENDS_FILENAME,
    INSTALL_SCRIPT,
    INSTALLED_MARKER,
    VERSION_FILENAME,
    ensure_db_dir,
    get_db_dir,
)
from pur.filesystem.structure import InstallFileStructure
from pur.models.package import InstallData, PackageStatus, strip_whitespace
from pur.utils.shell import spawn_script, wait_script

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Package:
    """A package recipe and the handle on its install record.

    Attributes:
        name: Package name, the recipe directory's basename.
        version: Whitespace-stripped contents of the ``version`` file.
        depends: Non-empty lines of the ``depends`` file, in order.
        dir: Recipe directory, used to locate the install script.
        db_dir: Install database directory.
        structure: Sandbox layout owned by this package.
    """

    name: str
    version: str
    depends: list[str]
    dir: Path
    db_dir: Path
    structure: InstallFileStructure = field(repr=False)

    @classmethod
    def from_dir(
        cls,
        path: Path,
        db_dir: Path | None = None,
        root: Path | None = None,
    ) -> "Package":
        """Parse a package recipe directory.

        Args:
            path: Recipe directory.
            db_dir: Install database directory. Defaults to the configured one.
            root: System root for projection. Defaults to the configured one.

        Returns:
            Parsed Package.

        Raises:
            NoVersionError: If ``version`` is missing or empty.
            NoDependsError: If ``depends`` is missing.
            NoDirectoryError: If the path has no usable name.
        """
        name = path.name
        if not name:
            raise NoDirectoryError(f"Package directory has no name: {path}")

        try:
            version = strip_whitespace((path / VERSION_FILENAME).read_text())
        except (OSError, UnicodeDecodeError) as e:
            raise NoVersionError(f"{name}: cannot read {VERSION_FILENAME}") from e
        if not version:
            raise NoVersionError(f"{name}: empty {VERSION_FILENAME}")

        try:
            depends_text = (path / DEPENDS_FILENAME).read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise NoDependsError(f"{name}: cannot read {DEPENDS_FILENAME}") from e
        depends = [line for line in depends_text.splitlines() if line]

        db_dir = db_dir or get_db_dir()
        return cls(
            name=name,
            version=version,
            depends=depends,
            dir=path,
            db_dir=db_dir,
            structure=InstallFileStructure(name, db_dir=db_dir, root=root),
        )

    @property
    def install_dir(self) -> Path:
        """Install record directory, ``<db_dir>/<name>``."""
        return self.db_dir / self.name

    @property
    def files_dir(self) -> Path:
        """Build sandbox the install script writes into."""
        return self.structure.parent

    # =========================================================================
    # Status
    # =========================================================================

    def get_install_data(self, require_marker: bool = False) -> InstallData | None:
        """Read this package's install record.

        The database directory is created on demand.

        Args:
            require_marker: Only return data if the package is also installed.

        Returns:
            InstallData if the record exists and parses, None otherwise.
        """
        try:
            ensure_db_dir(self.db_dir)
        except RuntimeError as e:
            logger.warning("%s", e)
            return None

        path = self.install_dir
        if not path.is_dir():
            return None

        if require_marker and not any(
            entry.name.endswith(INSTALLED_MARKER) for entry in path.iterdir()
        ):
            return None

        try:
            return InstallData.from_dir(path)
        except NoVersionError:
            logger.debug("Ignoring unparseable install record %s", path)
            return None

    def is_built(self) -> bool:
        """Check whether the sandbox exists with a valid version record."""
        return self.get_install_data() is not None

    def is_installed(self) -> bool:
        """Check whether the package is built and carries the installed marker."""
        return self.get_install_data(require_marker=True) is not None

    def status(self) -> PackageStatus:
        """Get the lifecycle status of the package."""
        if self.is_installed():
            return PackageStatus.INSTALLED
        if self.is_built():
            return PackageStatus.BUILT
        return PackageStatus.AVAILABLE

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def build(self) -> None:
        """Build the package into its sandbox.

        Creates the sandbox skeleton, rewrites the version record, then runs
        ``<dir>/install <files_dir> <dir>`` with ``files_dir`` as its working
        directory and waits for it. The script's exit status is logged but
        not treated as a failure.

        Raises:
            OtherParseError: If the sandbox skeleton cannot be created.
            NoDirectoryError: If the version record cannot be created.
            MetadataWritingError: If the version record cannot be written.
            NoInstallScriptError: If the install script cannot be spawned.
            FailedInstallScriptError: If waiting on the install script fails.
        """
        try:
            self.structure.create_all()
        except FileStructureError as e:
            raise OtherParseError(f"{self.name}: cannot create sandbox") from e

        version_file = self.install_dir / VERSION_FILENAME
        if version_file.exists():
            try:
                version_file.unlink()
            except OSError as e:
                logger.debug("Could not remove old version record %s: %s", version_file, e)

        try:
            f = version_file.open("w", encoding="utf-8")
        except OSError as e:
            raise NoDirectoryError(f"{e}: {version_file}") from e
        with f:
            try:
                f.write(self.version)
            except OSError as e:
                raise MetadataWritingError("Version Metadata") from e

        install_script = self.dir / INSTALL_SCRIPT
        logger.info("Running %s for %s v%s", install_script, self.name, self.version)

        try:
            process = spawn_script(
                [install_script, self.files_dir, self.dir],
                cwd=self.files_dir,
            )
        except OSError as e:
            raise NoInstallScriptError(f"{self.name}: cannot run {install_script}") from e

        try:
            returncode = wait_script(process)
        except (OSError, subprocess.SubprocessError) as e:
            raise FailedInstallScriptError(f"{self.name}: {install_script} did not finish") from e

        if returncode != 0:
            logger.warning(
                "Install script for %s exited with status %d",
                self.name,
                returncode,
            )

    def install(self) -> None:
        """Mark the package installed and project it into the system tree.

        Raises:
            LinkError: If any projection symlink cannot be created.
        """
        marker = self.install_dir / INSTALLED_MARKER
        try:
            marker.touch()
        except OSError as e:
            logger.warning("Could not create installed marker %s: %s", marker, e)

        try:
            self.structure.symlink_out_scope()
        except FileStructureError as e:
            raise LinkError(f"{self.name}: projection failed") from e

    def remove_binaries(self) -> None:
        """Withdraw the projection, then delete the sandbox.

        Raises:
            NoDirectoryError: If a symlink or sandbox path cannot be removed.
        """
        try:
            self.structure.remove_symlinks()
            self.structure.delete_all()
        except FileStructureError as e:
            raise NoDirectoryError(str(e)) from e

    def uninstall(self) -> None:
        """Remove the package's projection and its install record.

        Raises:
            NotInstalledError: If the package was never built.
            ParseError: If withdrawal or deletion fails.
        """
        if not self.is_built():
            raise NotInstalledError(f"{self.name} is not installed")

        self.remove_binaries()

        try:
            self.structure.delete_all()
        except FileStructureError as e:
            raise OtherParseError(str(e)) from e

    def update(self) -> None:
        """Rebuild and reinstall the package from its recipe.

        Raises:
            ParseError: If any step fails; later steps are not attempted.
        """
        self.remove_binaries()
        self.build()
        try:
            self.install()
        except LinkError as e:
            raise OtherParseError(str(e)) from e


