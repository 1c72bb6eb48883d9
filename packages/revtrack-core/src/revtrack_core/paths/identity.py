"""Canonical package-relative paths for tracked files.

Loaders do not always record the same spelling of a path that a later scan
reports. Two cases are reconciled here:

* Absolute paths carrying an extra leading prefix the loader never saw
  (for example ``/private`` in front of ``/var/...`` on macOS). The package's
  base directory is located as a substring and everything before it dropped.
* Identifier paths of a pseudo-package whose paths start with a fixed,
  non-filesystem segment (``compiler/`` for the core compiler).

The base directory match is the *first* substring occurrence, not a prefix
test. A base directory name that also appears earlier in the path than the
real root will mis-normalize; this is a known limitation of the heuristic.

A leading prefix segment is only stripped for locations that declare
``subpath_prefix``. Ordinary packages keep a relative ``compiler/...`` path
as is, so normalizing an already-normalized path never changes it. A
pseudo-package path that repeats its own prefix (``compiler/compiler/x``)
loses one segment per pass.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from revtrack_core.registry.models import PackageLocation


def relpath_safe(path: str, start: str) -> str:
    """``os.path.relpath`` that leaves *path* alone when *start* is empty."""
    if not start:
        return path
    return os.path.relpath(path, start)


def _first_segment(path: str) -> str:
    head = path
    for sep in (os.sep, os.altsep):
        if sep:
            head = head.split(sep, 1)[0]
    return head


def normalize_path(filename: str, location: PackageLocation) -> str:
    """Express *filename* relative to the root of the package at *location*.

    Pure string manipulation; the file system is never touched. Paths that
    cannot be related to the package are returned unchanged.
    """
    if os.path.isabs(filename):
        base = location.base_dir
        idx = filename.find(base)
        if idx == -1:
            return filename
        if idx > 0:
            filename = filename[idx:]
        return relpath_safe(filename, base)

    prefix = location.subpath_prefix
    if prefix and _first_segment(filename) == prefix:
        return os.path.relpath(filename, prefix)
    return filename


def unique_dirs(files: Iterable[str]) -> set[str]:
    """Return the set of parent directories of *files*."""
    return {os.path.dirname(f) for f in files}
