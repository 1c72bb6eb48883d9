"""Existence checks that fall back to a file's relocated path."""

from __future__ import annotations

import os
import stat
from collections.abc import Mapping

# nominal path -> path the file actually lives at now
AlternateFileCache = Mapping[str, str]


def _is_regular_file(path: str) -> bool:
    """Like ``os.path.isfile`` but only "not found" counts as False.

    Permission and device errors propagate instead of reading as absent.
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return stat.S_ISREG(st.st_mode)


class FileExistenceResolver:
    """Answers whether a tracked file exists, at its nominal or alternate path.

    The alternate cache is consulted only when the nominal path is absent, and
    only one level deep: an alternate is never itself looked up again.
    """

    def __init__(self, alternates: AlternateFileCache | None = None) -> None:
        self._alternates: AlternateFileCache = alternates if alternates is not None else {}

    @property
    def alternates(self) -> AlternateFileCache:
        return self._alternates

    def resolve(self, filename: str) -> str | None:
        """Return the path *filename* can currently be read from, or None."""
        filename = os.path.normpath(filename)
        if _is_regular_file(filename):
            return filename
        alt = self._alternates.get(filename)
        if alt is None:
            return None
        return alt if _is_regular_file(alt) else None

    def exists(self, filename: str) -> bool:
        return self.resolve(filename) is not None


def file_exists(filename: str, alternates: AlternateFileCache | None = None) -> bool:
    """Convenience wrapper around FileExistenceResolver.exists()."""
    return FileExistenceResolver(alternates).exists(filename)
