"""JSON persistence for tracker state across processes."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from revtrack_core.freshness.clock import SYSTEM_CLOCK, ClockSource
from revtrack_core.freshness.oracle import ComparisonPolicy
from revtrack_core.freshness.tracker import SourceTracker
from revtrack_core.freshness.watchlist import WatchList
from revtrack_core.registry.models import PackageId, PackageLocation
from revtrack_core.registry.registry import PackageRegistry

STATE_VERSION = 1


class StateError(ValueError):
    """A state file exists but cannot be used."""

    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        where = f" {path}" if path is not None else ""
        super().__init__(f"Invalid state file{where}: {reason}")


def state_to_json(tracker: SourceTracker) -> str:
    """Serialize packages, alternates and watch lists to a JSON string."""
    watchlists = {}
    for dirname in tracker.watched_dirs():
        wl = tracker.watchlist(dirname)
        if wl is None:
            continue
        watchlists[dirname] = {
            "timestamp": wl.timestamp,
            "files": {
                name: owner.model_dump()
                for name, owner in sorted(wl.tracked_files.items())
            },
        }
    data = {
        "version": STATE_VERSION,
        "packages": [loc.model_dump() for loc in tracker.registry],
        "alternates": dict(tracker.resolver.alternates),
        "watchlists": watchlists,
    }
    return json.dumps(data, indent=2)


def state_from_json(
    data: str,
    clock: ClockSource = SYSTEM_CLOCK,
    policy: ComparisonPolicy = ComparisonPolicy.default,
    path: Path | None = None,
) -> SourceTracker:
    """Rebuild a SourceTracker from state_to_json() output."""
    try:
        obj = json.loads(data)
    except json.JSONDecodeError as e:
        raise StateError(path, f"not JSON ({e})") from e
    if not isinstance(obj, dict):
        raise StateError(path, "expected a JSON object")
    if obj.get("version") != STATE_VERSION:
        raise StateError(path, f"unsupported version {obj.get('version')!r}")

    try:
        registry = PackageRegistry(
            [PackageLocation.model_validate(p) for p in obj.get("packages", [])]
        )
        watched: dict[str, WatchList] = {}
        for dirname, wdata in obj.get("watchlists", {}).items():
            wl = WatchList(timestamp=float(wdata["timestamp"]))
            for name, owner in wdata.get("files", {}).items():
                wl.track(name, PackageId.model_validate(owner))
            watched[dirname] = wl
        alternates = dict(obj.get("alternates", {}))
    except (ValidationError, AttributeError, KeyError, TypeError, ValueError) as e:
        raise StateError(path, str(e)) from e

    return SourceTracker(
        registry=registry,
        alternates=alternates,
        clock=clock,
        policy=policy,
        watched=watched,
    )


def save_state(tracker: SourceTracker, path: Path) -> None:
    """Write tracker state to *path*, creating its parent directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(state_to_json(tracker))


def load_state(
    path: Path,
    clock: ClockSource = SYSTEM_CLOCK,
    policy: ComparisonPolicy = ComparisonPolicy.default,
) -> SourceTracker:
    """Read tracker state written by save_state()."""
    return state_from_json(path.read_text(), clock=clock, policy=policy, path=path)
