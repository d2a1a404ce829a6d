"""Action models for package lifecycle operations.

This module defines the lifecycle actions the coordinator performs and
the result records it reports back to the CLI.
"""

from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Type of lifecycle action.

    Attributes:
        BUILD: Run the install script into the package sandbox.
        INSTALL: Project a built package into the system tree.
        REMOVE: Withdraw the projection and delete the sandbox.
        UPDATE: Rebuild and reinstall at a newer repository version.
    """

    BUILD = "build"
    INSTALL = "install"
    REMOVE = "remove"
    UPDATE = "update"


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of one lifecycle action on one package.

    Attributes:
        action_type: The action that was performed.
        package: Name of the package.
        version: Version the action targeted.
        success: Whether the action completed successfully.
        message: Optional success message or additional information.
        error: Optional error message if the action failed.
    """

    action_type: ActionType
    package: str
    version: str
    success: bool
    message: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate result data after initialization."""
        if not self.package:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success
