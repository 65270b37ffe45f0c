"""Project layout.

Resolves where dependency sources, build trees and installs live on disk
for a root raft project:

    <root>/dependencies/<name>                      source checkout
    <root>/build/<tag>/dependencies/<name>          build tree
    <root>/build/<tag>/install                      shared install prefix
    <root>/build/.locks                             lock files
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from raftdeps.build_config import Build
    from raftdeps.config import Settings


@dataclass(frozen=True)
class Project:
    """Filesystem layout of a root raft project.

    Attributes:
        root: Project root directory.
        manifest_name: Manifest file name relative to the root.
        dependencies_dirname: Name of the dependency source directory.
        build_dirname: Name of the build output directory.
    """

    root: Path
    manifest_name: str = "raft.yaml"
    dependencies_dirname: str = "dependencies"
    build_dirname: str = "build"

    @classmethod
    def from_settings(cls, settings: Settings, root: Path | None = None) -> Project:
        """Create a project layout from settings.

        Args:
            settings: Application settings.
            root: Override for the project root (defaults to settings.project_dir).

        Returns:
            Project instance with an absolute root.
        """
        return cls(
            root=(root or settings.project_dir).resolve(),
            manifest_name=settings.manifest_name,
            dependencies_dirname=settings.dependencies_dirname,
            build_dirname=settings.build_dirname,
        )

    @property
    def manifest_path(self) -> Path:
        return self.root / self.manifest_name

    @property
    def build_root(self) -> Path:
        return self.root / self.build_dirname

    @property
    def lock_dir(self) -> Path:
        return self.build_root / ".locks"

    def dir_for_dependency(self, name: str) -> Path:
        """Directory the dependency's source is downloaded to."""
        return self.root / self.dependencies_dirname / name

    def dir_for_build(self, build: Build) -> Path:
        """Root of all outputs for one build configuration."""
        return self.build_root / build.tag

    def dir_for_dependency_build(self, name: str, build: Build) -> Path:
        """Build tree for a dependency, scoped per build configuration."""
        return self.dir_for_build(build) / self.dependencies_dirname / name

    def dir_for_dependency_install(self, build: Build) -> Path:
        """Install prefix shared by all dependencies of a build configuration."""
        return self.dir_for_build(build) / "install"


__all__ = ["Project"]
