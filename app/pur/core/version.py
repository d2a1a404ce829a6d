"""Version comparison for repository updates.

Versions are compared component by component after splitting on ``.``.
Each component's leading digits compare numerically and any remaining
suffix compares as a plain string, so ``1.10`` is newer than ``1.9`` and
``2.0`` is newer than ``1.9``. Missing trailing components count as ``0``.
"""

import string


def _split_component(component: str) -> tuple[int, str]:
    """Split one version component into (numeric part, suffix)."""
    suffix = component.lstrip(string.digits)
    digits = component[: len(component) - len(suffix)]
    return (int(digits) if digits else -1, suffix)


def version_key(version: str) -> list[tuple[int, str]]:
    """Build the comparison key of a version string."""
    return [_split_component(part) for part in version.split(".")]


def compare_versions(repo_version: str, installed_version: str) -> int:
    """Compare a repository version against an installed one.

    Args:
        repo_version: Version advertised by the repository.
        installed_version: Version recorded in the install database.

    Returns:
        Positive if the repository version is newer, negative if older,
        0 if they are equivalent.
    """
    left = version_key(repo_version)
    right = version_key(installed_version)

    padding = (0, "")
    for i in range(max(len(left), len(right))):
        a = left[i] if i < len(left) else padding
        b = right[i] if i < len(right) else padding
        if a != b:
            return 1 if a > b else -1
    return 0


def is_newer(repo_version: str, installed_version: str) -> bool:
    """Check whether the repository advertises a newer version."""
    return compare_versions(repo_version, installed_version) > 0
