"""Lifecycle coordination across packages.

Sequences build, install, update and remove over Package objects.
Dependencies are resolved depth-first in declaration order and are fully
installed before their dependent is built. These functions are shared by
the install, build, update and remove CLI commands.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pur.core.errors import (
    CompileFailError,
    DependencyCycleError,
    LinkError,
    NoDependFoundError,
    PackageUpdateError,
    ParseError,
    PurError,
    UninstallFailError,
    format_error_chain,
)
from pur.core.repo import find_package
from pur.models.action import ActionResult, ActionType
from pur.utils.formatting import print_debug_detail, print_error, print_info, print_success

if TYPE_CHECKING:
    from pur.core.package import Package
    from pur.core.repo import Repo
    from pur.models.package import InstallData

logger = logging.getLogger(__name__)


def _report_failure(verb: str, package: Package, error: PurError) -> None:
    """Print the one-line summary and debug chain for a failed action."""
    print_error(f"Failed to {verb} {package.name} v{package.version}... Skipping!")
    print_debug_detail(format_error_chain(error))


def _install_dependencies(
    package: Package,
    packages: list[Package],
    stack: list[str],
) -> None:
    """Install every dependency of ``package``, in declaration order.

    Args:
        package: Package whose dependencies to install.
        packages: Every package known to the repositories.
        stack: Names currently being resolved, outermost first.

    Raises:
        NoDependFoundError: If a dependency is not in ``packages``.
        DependencyCycleError: If a dependency is already on ``stack``.
        CompileFailError: If a dependency fails to build or install.
    """
    for name in package.depends:
        dependency = find_package(name, packages)
        if dependency is None:
            print_error(f"{package.name} depends on {name}, which was not found")
            raise NoDependFoundError(f"{package.name}: dependency {name} not found")
        _install(dependency, packages, stack)


def _enter(package: Package, stack: list[str]) -> None:
    """Push ``package`` onto the resolution stack, rejecting cycles."""
    if package.name in stack:
        cycle = " -> ".join([*stack[stack.index(package.name) :], package.name])
        print_error(f"Dependency cycle detected: {cycle}")
        raise DependencyCycleError(f"Dependency cycle: {cycle}")
    stack.append(package.name)


def _build_one(package: Package) -> None:
    """Build a single package whose dependencies are already installed."""
    try:
        package.build()
    except ParseError as e:
        _report_failure("build", package, e)
        raise CompileFailError(f"{package.name} v{package.version} failed to build") from e
    logger.info("Built %s v%s", package.name, package.version)


def _install(package: Package, packages: list[Package], stack: list[str]) -> None:
    """Install dependencies, build if needed, then project ``package``."""
    _enter(package, stack)
    try:
        _install_dependencies(package, packages, stack)

        if not package.is_built():
            _build_one(package)

        try:
            package.install()
        except LinkError as e:
            _report_failure("install", package, e)
            raise CompileFailError(
                f"{package.name} v{package.version} failed to install"
            ) from e

        print_success(f"Installed {package.name} v{package.version}")
    finally:
        stack.pop()


def install(package: Package, packages: list[Package]) -> ActionResult:
    """Install a package and, first, all of its dependencies.

    Dependencies are installed depth-first in declaration order. A package
    is only built if it is not built already; it is always (re)projected.

    Args:
        package: Package to install.
        packages: Every package known to the repositories.

    Returns:
        ActionResult for the requested package.

    Raises:
        NoDependFoundError: If any dependency is missing from ``packages``.
        DependencyCycleError: If the dependency graph has a cycle.
        CompileFailError: If any package in the chain fails to build or install.
    """
    _install(package, packages, [])
    return ActionResult(
        action_type=ActionType.INSTALL,
        package=package.name,
        version=package.version,
        success=True,
        message="Installed",
    )


def build(package: Package, packages: list[Package]) -> ActionResult:
    """Build a package after installing its dependencies.

    Dependencies are installed (not merely built) because they must be
    usable while the package builds. The package itself is built but not
    projected.

    Args:
        package: Package to build.
        packages: Every package known to the repositories.

    Returns:
        ActionResult for the requested package.

    Raises:
        NoDependFoundError: If any dependency is missing from ``packages``.
        DependencyCycleError: If the dependency graph has a cycle.
        CompileFailError: If a dependency or the package fails.
    """
    stack: list[str] = []
    _enter(package, stack)
    try:
        _install_dependencies(package, packages, stack)
        _build_one(package)
    finally:
        stack.pop()

    print_success(f"Built {package.name} v{package.version}")
    print_info(f"Run 'pur install {package.name}' to create symlinks.")
    return ActionResult(
        action_type=ActionType.BUILD,
        package=package.name,
        version=package.version,
        success=True,
        message="Built",
    )


def _update_one(package: Package, data: InstallData) -> None:
    """Rebuild one outdated package, wrapping any failure."""
    try:
        package.update()
    except PurError as e:
        raise PackageUpdateError(
            f"{package.name}: update from {data.version} to {package.version} failed"
        ) from e


def update(repository: Repo) -> list[ActionResult]:
    """Refresh a repository and update its outdated installed packages.

    A package that fails to update is reported and skipped; the remaining
    packages are still updated.

    Args:
        repository: Repository to refresh.

    Returns:
        One ActionResult per package that had an update available.

    Raises:
        UpdateError: If the repository itself cannot be refreshed.
    """
    results: list[ActionResult] = []

    def _update_package(package: Package, data: InstallData) -> None:
        print_info(
            f"Found new version {package.version} for {package.name}! "
            f"Updating from {data.version}..."
        )
        try:
            _update_one(package, data)
        except PackageUpdateError as e:
            _report_failure("update", package, e)
            results.append(
                ActionResult(
                    action_type=ActionType.UPDATE,
                    package=package.name,
                    version=package.version,
                    success=False,
                    error=str(e),
                )
            )
            return

        print_success(f"Updated {package.name} to v{package.version}")
        results.append(
            ActionResult(
                action_type=ActionType.UPDATE,
                package=package.name,
                version=package.version,
                success=True,
                message=f"Updated from {data.version}",
            )
        )

    repository.update_repository(_update_package)
    return results


def remove(package: Package) -> ActionResult:
    """Uninstall a package.

    Args:
        package: Package to remove.

    Returns:
        ActionResult for the package.

    Raises:
        UninstallFailError: If the package is not installed or removal fails.
    """
    try:
        package.uninstall()
    except ParseError as e:
        _report_failure("remove", package, e)
        raise UninstallFailError(f"{package.name} v{package.version} failed to uninstall") from e

    print_success(f"Removed {package.name} v{package.version}")
    return ActionResult(
        action_type=ActionType.REMOVE,
        package=package.name,
        version=package.version,
        success=True,
        message="Removed",
    )
