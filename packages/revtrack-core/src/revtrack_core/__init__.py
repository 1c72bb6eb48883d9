"""revtrack Core - source-file staleness tracking with path identity reconciliation."""

from revtrack_core.config import RevtrackConfig, load_config
from revtrack_core.freshness import (
    ComparisonPolicy,
    FreshnessPoller,
    SourceTracker,
    StalenessReport,
    WatchList,
    is_newer,
    systime,
)
from revtrack_core.paths import FileExistenceResolver, normalize_path
from revtrack_core.registry import PackageId, PackageLocation, PackageRegistry

__version__ = "0.1.0"

__all__ = [
    "ComparisonPolicy",
    "FileExistenceResolver",
    "FreshnessPoller",
    "PackageId",
    "PackageLocation",
    "PackageRegistry",
    "RevtrackConfig",
    "SourceTracker",
    "StalenessReport",
    "WatchList",
    "is_newer",
    "load_config",
    "normalize_path",
    "systime",
]
