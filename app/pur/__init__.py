"""pur - source-based package manager.

Builds packages from repository recipes into per-package sandboxes under
/var/db/installed and projects their artefacts into the system tree via
symlinks.
"""

__version__ = "0.1.0"
