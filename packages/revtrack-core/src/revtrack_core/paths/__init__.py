"""Path identity reconciliation and existence checks."""

from revtrack_core.paths.identity import normalize_path, relpath_safe, unique_dirs
from revtrack_core.paths.resolver import (
    AlternateFileCache,
    FileExistenceResolver,
    file_exists,
)

__all__ = [
    "AlternateFileCache",
    "FileExistenceResolver",
    "file_exists",
    "normalize_path",
    "relpath_safe",
    "unique_dirs",
]
