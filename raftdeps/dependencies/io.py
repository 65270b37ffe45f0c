"""Manifest loading.

This module reads a raft dependency manifest (YAML or JSON) and turns
its entries into Dependency objects.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from raftdeps.backends.cmake import CMakeBackend
from raftdeps.dependencies.models import CMakeDependency, RepositoryDependency
from raftdeps.dependencies.schema import DependencySchema, ManifestSchema
from raftdeps.types import DependencyKind
from raftdeps.vcs import GitRepository

if TYPE_CHECKING:
    from raftdeps.config import Settings
    from raftdeps.dependencies.models import Dependency


class ManifestError(Exception):
    """Raised when a manifest cannot be read or is invalid."""

    def __init__(self, message: str, code: str = "manifest_error") -> None:
        super().__init__(message)
        self.code = code


def load_manifest_data(path: Path) -> dict[str, Any]:
    """Load a manifest file and return its contents as a dict.

    Files ending in .json are parsed as JSON, anything else as YAML.

    Raises:
        ManifestError: If the file is missing, unreadable, unparsable, or
            not a mapping.
    """
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ManifestError(f"Cannot parse manifest {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ManifestError(
            f"Expected a mapping in {path}, got {type(data).__name__}"
        )
    return data


def load_manifest(path: Path) -> ManifestSchema:
    """Load and validate a manifest file.

    Raises:
        ManifestError: If the file cannot be read or fails validation.
    """
    data = load_manifest_data(path)
    try:
        return ManifestSchema.model_validate(data)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e


def create_dependency(
    schema: DependencySchema,
    base_dir: Path,
    settings: Settings | None = None,
) -> Dependency:
    """Create a Dependency from a manifest entry.

    Args:
        schema: Manifest entry.
        base_dir: Directory relative patch paths are resolved against.
        settings: Settings supplying tool executables (defaults if None).

    Returns:
        RepositoryDependency or CMakeDependency, depending on schema.kind.
    """
    git = settings.git_executable if settings else "git"
    repository = GitRepository(
        uri=schema.repository.uri,
        branch=schema.repository.branch,
        git=git,
    )
    patches = tuple(base_dir / patch for patch in schema.patches)

    if schema.kind == DependencyKind.REPOSITORY:
        return RepositoryDependency(
            descriptor=schema.descriptor(),
            repository=repository,
            patches=patches,
        )

    backend = CMakeBackend(
        cmake=settings.cmake_executable if settings else "cmake",
        generator=settings.cmake_generator if settings else None,
    )
    return CMakeDependency(
        descriptor=schema.descriptor(),
        repository=repository,
        patches=patches,
        backend=backend,
    )


def load_dependencies(
    path: Path,
    settings: Settings | None = None,
) -> list[Dependency]:
    """Load a manifest and create its dependencies, in declaration order.

    Raises:
        ManifestError: If the manifest cannot be read or is invalid.
    """
    manifest = load_manifest(path)
    base_dir = path.parent
    return [create_dependency(dep, base_dir, settings) for dep in manifest.dependencies]


__all__ = [
    "ManifestError",
    "create_dependency",
    "load_dependencies",
    "load_manifest",
    "load_manifest_data",
]
