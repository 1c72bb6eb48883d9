"""Pydantic models identifying packages and where they live on disk."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Leading segment embedded in the core-compiler pseudo-package's file paths
CORE_COMPILER_PREFIX = "compiler"


class PackageId(BaseModel):
    """Opaque, value-compared identifier for one logical unit of loaded code."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    uuid: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v

    def __str__(self) -> str:
        if self.uuid:
            return f"{self.name} [{self.uuid}]"
        return self.name


class PackageLocation(BaseModel):
    """A package's root directory, as recorded when it was first located.

    ``base_dir`` may be empty for packages with no well-defined root; path
    normalization is then a no-op. ``subpath_prefix`` is set only for
    packages whose identifier paths carry a non-filesystem leading segment.
    """

    model_config = ConfigDict(frozen=True)

    package: PackageId
    base_dir: str = ""
    descriptor: str | None = None
    subpath_prefix: str | None = None

    @classmethod
    def core_compiler(cls, base_dir: str = "", descriptor: str | None = None) -> PackageLocation:
        """Location for the core-compiler pseudo-package."""
        return cls(
            package=PackageId(name="Compiler"),
            base_dir=base_dir,
            descriptor=descriptor,
            subpath_prefix=CORE_COMPILER_PREFIX,
        )

    @property
    def display_name(self) -> str:
        return self.descriptor or str(self.package)
