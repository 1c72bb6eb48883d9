"""Freshness tracking: clocks, comparison policy, watch lists, and polling."""

from revtrack_core.freshness.clock import (
    SYSTEM_CLOCK,
    ClockSource,
    ManualClock,
    SystemClock,
    systime,
)
from revtrack_core.freshness.oracle import (
    ComparisonPolicy,
    is_newer,
    policy_for_platform,
    resolve_policy,
)
from revtrack_core.freshness.poller import FreshnessPoller
from revtrack_core.freshness.state import StateError, load_state, save_state
from revtrack_core.freshness.tracker import SourceTracker, StaleEntry, StalenessReport
from revtrack_core.freshness.watchlist import WatchList

__all__ = [
    "SYSTEM_CLOCK",
    "ClockSource",
    "ComparisonPolicy",
    "FreshnessPoller",
    "ManualClock",
    "SourceTracker",
    "StaleEntry",
    "StalenessReport",
    "StateError",
    "SystemClock",
    "WatchList",
    "is_newer",
    "load_state",
    "policy_for_platform",
    "resolve_policy",
    "save_state",
    "systime",
]
