"""Install file structure and directory walking.

This module provides the per-package sandbox layout and the symlink
projection of its contents into the system tree.
"""

from pur.filesystem.structure import InstallFileStructure
from pur.filesystem.walker import walk

__all__ = ["InstallFileStructure", "walk"]
