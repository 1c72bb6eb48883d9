"""Per-directory record of tracked files and their staleness checkpoint."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from revtrack_core.freshness.clock import SYSTEM_CLOCK, ClockSource
from revtrack_core.registry.models import PackageId


@dataclass
class WatchList:
    """Files tracked in one directory, plus when the directory was last checked.

    Not synchronized; callers sharing an instance across threads must hold
    their own lock. ``timestamp`` never moves backwards.
    """

    timestamp: float
    tracked_files: dict[str, PackageId] = field(default_factory=dict)

    @classmethod
    def create(cls, clock: ClockSource = SYSTEM_CLOCK) -> WatchList:
        return cls(timestamp=clock.now())

    def record_timestamp(self, clock: ClockSource = SYSTEM_CLOCK) -> float:
        """Mark the directory as freshly checked as of ``clock.now()``."""
        return self.advance_to(clock.now())

    def advance_to(self, timestamp: float) -> float:
        # A wall clock stepped backwards must not reopen an older window
        if timestamp > self.timestamp:
            self.timestamp = timestamp
        return self.timestamp

    def track(self, path: str, owner: PackageId) -> None:
        """Track *path* as owned by *owner*, replacing any previous owner."""
        self.tracked_files[path] = owner

    def contains(self, path: str) -> bool:
        return path in self.tracked_files

    def owner(self, path: str) -> PackageId | None:
        return self.tracked_files.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self.tracked_files

    def __iter__(self) -> Iterator[str]:
        return iter(self.tracked_files)

    def __len__(self) -> int:
        return len(self.tracked_files)
