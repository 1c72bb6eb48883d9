"""Tracking loaded source files per directory and reporting which changed."""

from __future__ import annotations

import os
import threading
from collections.abc import Iterable

from pydantic import BaseModel, Field

from revtrack_core.freshness.clock import SYSTEM_CLOCK, ClockSource
from revtrack_core.freshness.oracle import ComparisonPolicy, is_newer
from revtrack_core.freshness.watchlist import WatchList
from revtrack_core.paths.identity import normalize_path, unique_dirs
from revtrack_core.paths.resolver import AlternateFileCache, FileExistenceResolver
from revtrack_core.registry.models import PackageId, PackageLocation
from revtrack_core.registry.registry import PackageRegistry


class StaleEntry(BaseModel):
    """A tracked file modified at or after its directory's checkpoint."""

    path: str
    package: PackageId
    package_path: str
    mtime: float
    checkpoint: float


class StalenessReport(BaseModel):
    """Outcome of one pass over every watched directory."""

    stale: list[StaleEntry] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    checked_at: float = 0.0
    total_files: int = 0

    @property
    def packages(self) -> set[PackageId]:
        """Packages owning at least one stale file."""
        return {entry.package for entry in self.stale}


class SourceTracker:
    """Owns one WatchList per directory and serializes access to them.

    Files are tracked under their basename in the WatchList of their parent
    directory. Staleness of each file is judged against that directory's
    checkpoint using the configured comparison policy.
    """

    def __init__(
        self,
        registry: PackageRegistry | None = None,
        alternates: AlternateFileCache | None = None,
        clock: ClockSource = SYSTEM_CLOCK,
        policy: ComparisonPolicy = ComparisonPolicy.default,
        watched: dict[str, WatchList] | None = None,
    ) -> None:
        self.registry = registry if registry is not None else PackageRegistry()
        self.resolver = FileExistenceResolver(alternates)
        self.clock = clock
        self.policy = policy
        self._watched: dict[str, WatchList] = dict(watched or {})
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, location: PackageLocation) -> None:
        with self._lock:
            self.registry.register(location)

    def track(self, filename: str, package: PackageId) -> WatchList:
        """Track *filename* as belonging to *package*.

        The package must already be registered. Returns the WatchList of the
        file's directory, created on first use. Loading a file refreshes the
        directory's checkpoint, so the version just loaded is never stale.
        """
        self._require(package)
        dirname, basename = os.path.split(os.path.abspath(filename))
        now = self.clock.now()
        with self._lock:
            wl = self._watched.get(dirname)
            if wl is None:
                wl = WatchList(timestamp=now)
                self._watched[dirname] = wl
            wl.track(basename, package)
            wl.advance_to(now)
        return wl

    def track_many(self, filenames: Iterable[str], package: PackageId) -> None:
        """Track several files; every touched directory shares one checkpoint."""
        self._require(package)
        paths = [os.path.abspath(f) for f in filenames]
        dirs = unique_dirs(paths)
        now = self.clock.now()
        with self._lock:
            for dirname in dirs:
                if dirname not in self._watched:
                    self._watched[dirname] = WatchList(timestamp=now)
            for path in paths:
                dirname, basename = os.path.split(path)
                self._watched[dirname].track(basename, package)
            for dirname in dirs:
                self._watched[dirname].advance_to(now)

    def discard(self, dirname: str) -> WatchList | None:
        """Stop watching *dirname*; returns the WatchList that was dropped."""
        with self._lock:
            return self._watched.pop(os.path.abspath(dirname), None)

    def _require(self, package: PackageId) -> None:
        if package not in self.registry:
            raise KeyError(f"Package not registered: {package}")

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def watched_dirs(self) -> list[str]:
        with self._lock:
            return sorted(self._watched)

    def watchlist(self, dirname: str) -> WatchList | None:
        with self._lock:
            return self._watched.get(os.path.abspath(dirname))

    def owner(self, filename: str) -> PackageId | None:
        dirname, basename = os.path.split(os.path.abspath(filename))
        with self._lock:
            wl = self._watched.get(dirname)
            return wl.owner(basename) if wl is not None else None

    def package_path(self, filename: str) -> str | None:
        """Canonical path of *filename* relative to the package that owns it."""
        owner = self.owner(filename)
        if owner is None:
            return None
        return self._package_path(os.path.abspath(filename), owner)

    def _package_path(self, path: str, owner: PackageId) -> str:
        location = self.registry.get(owner)
        if location is None:
            return path
        return normalize_path(path, location)

    # ------------------------------------------------------------------
    # Staleness
    # ------------------------------------------------------------------

    def check(self, update: bool = True) -> StalenessReport:
        """Compare every tracked file's mtime against its directory checkpoint.

        The new checkpoint is read from the clock before any file is stat'ed,
        so an edit landing mid-check is reported again next time rather than
        lost. ``OSError`` other than a vanished file propagates and leaves all
        checkpoints untouched.
        """
        with self._lock:
            checked_at = self.clock.now()
            stale: list[StaleEntry] = []
            missing: list[str] = []
            total = 0

            for dirname in sorted(self._watched):
                wl = self._watched[dirname]
                for basename, owner in sorted(wl.tracked_files.items()):
                    total += 1
                    path = os.path.join(dirname, basename)
                    actual = self.resolver.resolve(path)
                    if actual is None:
                        missing.append(path)
                        continue
                    try:
                        mtime = os.stat(actual).st_mtime
                    except FileNotFoundError:
                        missing.append(path)
                        continue
                    if is_newer(mtime, wl.timestamp, self.policy):
                        stale.append(StaleEntry(
                            path=path,
                            package=owner,
                            package_path=self._package_path(path, owner),
                            mtime=mtime,
                            checkpoint=wl.timestamp,
                        ))

            if update:
                for wl in self._watched.values():
                    wl.advance_to(checked_at)

        return StalenessReport(
            stale=stale,
            missing=missing,
            checked_at=checked_at,
            total_files=total,
        )
