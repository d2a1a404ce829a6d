"""Package state models.

This module defines the recorded state of a built package and the
lifecycle status a repository package can be in.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pur.core.errors import NoVersionError
from pur.core.paths import VERSION_FILENAME


class PackageStatus(str, Enum):
    """Lifecycle status of a package.

    Attributes:
        AVAILABLE: Present in a repository only.
        BUILT: Sandbox and version record exist, no projection.
        INSTALLED: Built and projected into the system tree.
    """

    AVAILABLE = "available"
    BUILT = "built"
    INSTALLED = "installed"


def strip_whitespace(text: str) -> str:
    """Remove every whitespace character from a string."""
    return "".join(text.split())


@dataclass(frozen=True, slots=True)
class InstallData:
    """Recorded state of a previously built package.

    Attributes:
        path: Install record directory, ``<db_dir>/<name>``.
        version: Version the sandbox was built from.
    """

    path: Path
    version: str

    @property
    def name(self) -> str:
        """Package name the record belongs to."""
        return self.path.name

    @classmethod
    def from_dir(cls, path: Path) -> "InstallData":
        """Parse an install record directory.

        Args:
            path: Directory holding the ``version`` file.

        Returns:
            InstallData with the whitespace-stripped version.

        Raises:
            NoVersionError: If the version file is missing, unreadable or empty.
        """
        try:
            version = strip_whitespace((path / VERSION_FILENAME).read_text())
        except (OSError, UnicodeDecodeError) as e:
            raise NoVersionError(f"No version record in {path}") from e
        if not version:
            raise NoVersionError(f"Empty version record in {path}")
        return cls(path=path, version=version)
