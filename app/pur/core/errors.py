"""Exception hierarchy for pur.

All errors derive from PurError. Each failure family has its own base
class with one subclass per variant, so callers can catch as broadly or
narrowly as they need. Errors crossing a layer boundary are re-raised
with ``raise ... from exc`` to keep the full cause chain.
"""


class PurError(Exception):
    """Base exception for all pur errors."""


# =============================================================================
# File structure errors
# =============================================================================


class FileStructureError(PurError):
    """Base exception for install file structure failures."""


class FileCreateError(FileStructureError):
    """Raised when a file or directory cannot be created."""


class FileDeleteError(FileStructureError):
    """Raised when a file or directory cannot be deleted."""


class SymLinkError(FileStructureError):
    """Raised when a projection symlink cannot be created."""


class FileCopyError(FileStructureError):
    """Raised when a sandbox subtree cannot be copied."""


class NoPermissionError(FileStructureError):
    """Raised when the filesystem refuses an operation for lack of privilege."""


class OtherFileStructureError(FileStructureError):
    """Raised for filesystem failures that fit no other category."""


def file_structure_error(
    exc: OSError,
    message: str,
    kind: type[FileStructureError] | None = None,
) -> FileStructureError:
    """Classify an OSError into a FileStructureError.

    Args:
        exc: The underlying OS error.
        message: Diagnostic text describing the failed operation.
        kind: Force a specific error class instead of classifying by errno.

    Returns:
        FileStructureError instance (not raised) carrying the message.
    """
    if kind is None:
        if isinstance(exc, FileNotFoundError):
            kind = FileDeleteError
        elif isinstance(exc, FileExistsError):
            kind = FileCreateError
        elif isinstance(exc, PermissionError):
            kind = NoPermissionError
        else:
            kind = OtherFileStructureError
    return kind(f"{message}: {exc}")


# =============================================================================
# Parse errors
# =============================================================================


class ParseError(PurError):
    """Base exception for package parsing and per-package lifecycle failures."""


class NoVersionError(ParseError):
    """Raised when a package or install record has no readable version file."""


class NoDependsError(ParseError):
    """Raised when a package has no readable depends file."""


class NoDirectoryError(ParseError):
    """Raised when a required directory or file cannot be reached."""


class MetadataWritingError(ParseError):
    """Raised when the version metadata cannot be written."""


class AlreadyInstalledError(ParseError):
    """Raised when a package is already installed."""


class NotInstalledError(ParseError):
    """Raised when removing a package that was never built."""


class NoInstallScriptError(ParseError):
    """Raised when the package install script cannot be spawned."""


class FailedInstallScriptError(ParseError):
    """Raised when waiting on the package install script fails."""


class OtherParseError(ParseError):
    """Raised for lifecycle failures wrapped from another error family."""


# =============================================================================
# Build errors
# =============================================================================


class BuildError(PurError):
    """Base exception for projection failures during install."""


class LinkError(BuildError):
    """Raised when the package projection cannot be created."""


# =============================================================================
# Execute errors
# =============================================================================


class ExecuteError(PurError):
    """Base exception for coordinator-level failures."""


class NoDependFoundError(ExecuteError):
    """Raised when a declared dependency is not present in any repository."""


class CompileFailError(ExecuteError):
    """Raised when building or installing a package fails."""


class UninstallFailError(ExecuteError):
    """Raised when uninstalling a package fails."""


class DependencyCycleError(ExecuteError):
    """Raised when a package depends on itself, directly or transitively."""


class PackageNotFoundError(ExecuteError):
    """Raised when a requested package name is not in any repository."""


# =============================================================================
# Update errors
# =============================================================================


class UpdateError(PurError):
    """Base exception for repository update failures."""


class NoUpdateScriptError(UpdateError):
    """Raised when a repository has no update script."""


class UpdateScriptError(UpdateError):
    """Raised when the repository update script fails to run."""


class PackageUpdateError(UpdateError):
    """Raised when a single package update fails inside a repository update."""


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigError(PurError):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def format_error_chain(exc: BaseException) -> str:
    """Render the debug form of an exception and its causes.

    Args:
        exc: The outermost exception.

    Returns:
        One ``repr`` per line, outermost first, following ``__cause__``.
    """
    lines: list[str] = []
    current: BaseException | None = exc
    while current is not None:
        lines.append(repr(current))
        current = current.__cause__
    return "\n  caused by ".join(lines)
