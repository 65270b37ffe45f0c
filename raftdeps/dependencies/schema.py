"""Pydantic models for dependency descriptors and manifests.

A manifest lists the dependencies of a root project. Each entry carries
the descriptor (name and backend config options) plus where the source
comes from and which patches to apply.
"""

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from raftdeps.types import ConfigValue, DependencyKind

# Names become directory names, keep them path-safe
DEPENDENCY_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.\-+]+$")


class DependencyDescriptor(BaseModel):
    """Declared identity and build configuration of a dependency.

    Attributes:
        name: Dependency name, unique within a build.
        config_options: Backend-specific options (e.g. CMake cache variables).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Annotated[
        str, Field(description="Dependency name", min_length=1, max_length=255)
    ]
    config_options: dict[str, ConfigValue] = Field(
        default_factory=dict, description="Backend-specific config options"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name is usable as a directory name."""
        if v in {".", ".."} or not DEPENDENCY_NAME_PATTERN.match(v):
            raise ValueError(
                f"name must match pattern {DEPENDENCY_NAME_PATTERN.pattern}, got '{v}'"
            )
        return v

    @field_validator("config_options")
    @classmethod
    def validate_config_keys(cls, v: dict[str, ConfigValue]) -> dict[str, ConfigValue]:
        """Validate option keys are non-empty and contain no whitespace or '='."""
        for key in v:
            if not key or any(c.isspace() for c in key) or "=" in key:
                raise ValueError(f"invalid config option name '{key}'")
        return v


class RepositorySchema(BaseModel):
    """Schema for a git repository source.

    Attributes:
        uri: Clone URI.
        branch: Optional branch, tag or commit to check out.
    """

    model_config = ConfigDict(extra="forbid")

    uri: Annotated[str, Field(description="Clone URI", min_length=1)]
    branch: str | None = Field(default=None, description="Branch, tag or commit")


class DependencySchema(DependencyDescriptor):
    """Manifest entry for one dependency.

    Attributes:
        kind: How the dependency is built after download.
        repository: Where the source is fetched from.
        patches: Patch files, relative to the manifest directory, applied in order.
    """

    kind: DependencyKind = Field(
        default=DependencyKind.CMAKE, description="Build kind"
    )
    repository: RepositorySchema
    patches: list[str] = Field(default_factory=list, description="Patch files")

    @field_validator("patches")
    @classmethod
    def validate_patches(cls, v: list[str]) -> list[str]:
        """Validate patch entries are non-empty."""
        for item in v:
            if not item or not item.strip():
                raise ValueError("patches must be non-empty strings")
        return v

    def descriptor(self) -> DependencyDescriptor:
        """Return the descriptor part of this entry."""
        return DependencyDescriptor(name=self.name, config_options=self.config_options)


class ManifestSchema(BaseModel):
    """Schema for a raft dependency manifest.

    Attributes:
        dependencies: Dependency entries, in the order they should be built.
    """

    model_config = ConfigDict(extra="forbid")

    dependencies: list[DependencySchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_names(self) -> "ManifestSchema":
        """Reject manifests declaring the same dependency name twice."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for dep in self.dependencies:
            if dep.name in seen and dep.name not in duplicates:
                duplicates.append(dep.name)
            seen.add(dep.name)
        if duplicates:
            raise ValueError(f"duplicate dependency names: {', '.join(duplicates)}")
        return self

    def get(self, name: str) -> DependencySchema | None:
        """Return the entry named name, if any."""
        for dep in self.dependencies:
            if dep.name == name:
                return dep
        return None


__all__ = [
    "DEPENDENCY_NAME_PATTERN",
    "DependencyDescriptor",
    "DependencySchema",
    "ManifestSchema",
    "RepositorySchema",
]
