"""Package identity and location registry."""

from revtrack_core.registry.models import CORE_COMPILER_PREFIX, PackageId, PackageLocation
from revtrack_core.registry.registry import PackageRegistry

__all__ = [
    "CORE_COMPILER_PREFIX",
    "PackageId",
    "PackageLocation",
    "PackageRegistry",
]
