"""In-process registry of package locations."""

from __future__ import annotations

from collections.abc import Iterator

from revtrack_core.registry.models import PackageId, PackageLocation


class PackageRegistry:
    """Maps each PackageId to the location it was loaded from.

    Re-registering a package replaces its location.
    """

    def __init__(self, locations: list[PackageLocation] | None = None) -> None:
        self._locations: dict[PackageId, PackageLocation] = {}
        for loc in locations or []:
            self.register(loc)

    def register(self, location: PackageLocation) -> None:
        self._locations[location.package] = location

    def get(self, package: PackageId) -> PackageLocation | None:
        return self._locations.get(package)

    def __getitem__(self, package: PackageId) -> PackageLocation:
        try:
            return self._locations[package]
        except KeyError:
            raise KeyError(f"Package not registered: {package}") from None

    def __contains__(self, package: object) -> bool:
        return package in self._locations

    def __iter__(self) -> Iterator[PackageLocation]:
        return iter(self._locations.values())

    def __len__(self) -> int:
        return len(self._locations)
