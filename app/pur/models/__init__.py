"""Data models for pur.

This module exports the data structures shared across the application.
"""

from pur.models.action import ActionResult, ActionType
from pur.models.package import InstallData, PackageStatus

__all__ = [
    "ActionResult",
    "ActionType",
    "InstallData",
    "PackageStatus",
]
