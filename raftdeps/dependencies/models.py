"""Dependency contract and its variants.

A dependency is a named unit with two steps:

- download: fetch the source into the project and apply patches
- build_install: build it and install it where other dependencies and the
  root project can find it

Dependencies hold no progress state of their own. Whether a download
already happened is read from the filesystem: an existing dependency
directory means the source is present and patched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from raftdeps.backends.base import BuildBackend, BuildOptions
from raftdeps.backends.cmake import CMakeBackend

if TYPE_CHECKING:
    from raftdeps.build_config import Build
    from raftdeps.dependencies.schema import DependencyDescriptor
    from raftdeps.project import Project
    from raftdeps.vcs import Repository

logger = logging.getLogger(__name__)


class Dependency(Protocol):
    """Interface used to interact with a build dependency."""

    @property
    def name(self) -> str:
        """Name of the dependency. Must be unique in a build."""

    @property
    def patches(self) -> Sequence[Path]:
        """Patches applied to the dependency source, in order."""

    def download(self, project: Project, build: Build) -> None:
        """Download the source used by the dependency."""

    def build_install(self, project: Project, build: Build) -> None:
        """Build the dependency and install it for the build configuration."""


def download_source(
    project: Project,
    name: str,
    repository: Repository,
    patches: Sequence[Path],
) -> bool:
    """Download a dependency's source and apply its patches.

    Does nothing if the dependency directory already exists.

    Args:
        project: Root project.
        name: Dependency name.
        repository: Source repository.
        patches: Patch files, applied in order.

    Returns:
        True if a download happened, False if it was skipped.

    Raises:
        CommandError: If fetching or patching fails. Remaining patches are
            not attempted.
    """
    dependency_dir = project.dir_for_dependency(name)
    if dependency_dir.exists():
        logger.debug("[%s] Source present at %s, skipping download", name, dependency_dir)
        return False

    repository.download(dependency_dir)
    for patch in patches:
        repository.patch(dependency_dir, patch)
    return True


@dataclass(frozen=True)
class RepositoryDependency:
    """A source-only dependency downloaded from a repository.

    Attributes:
        descriptor: Declared name and config options.
        repository: Where the source is downloaded from.
        patches: Patches applied after download, in order.
    """

    descriptor: DependencyDescriptor
    repository: Repository
    patches: tuple[Path, ...] = ()

    @property
    def name(self) -> str:
        return self.descriptor.name

    def download(self, project: Project, build: Build) -> None:
        download_source(project, self.name, self.repository, self.patches)

    def build_install(self, project: Project, build: Build) -> None:
        logger.debug("[%s] Source-only dependency, nothing to build", self.name)


@dataclass(frozen=True)
class CMakeDependency:
    """A dependency built and installed as a standard CMake project.

    Attributes:
        descriptor: Declared name and CMake cache variables.
        repository: Where the source is downloaded from.
        patches: Patches applied after download, in order.
        backend: Build backend running configure, build and install.
    """

    descriptor: DependencyDescriptor
    repository: Repository
    patches: tuple[Path, ...] = ()
    backend: BuildBackend = field(default_factory=CMakeBackend)

    @property
    def name(self) -> str:
        return self.descriptor.name

    def download(self, project: Project, build: Build) -> None:
        download_source(project, self.name, self.repository, self.patches)

    def build_options(self, project: Project, build: Build) -> BuildOptions:
        """Options handed to the backend's configure step."""
        return BuildOptions(
            install_prefix=project.dir_for_dependency_install(build),
            release=build.is_deploy,
            platform=build.platform,
            config_options=dict(self.descriptor.config_options),
        )

    def build_install(self, project: Project, build: Build) -> None:
        """Configure, build and install, stopping at the first failing step.

        The build tree is left in place on failure.
        """
        source_dir = project.dir_for_dependency(self.name)
        build_dir = project.dir_for_dependency_build(self.name, build)
        options = self.build_options(project, build)

        self.backend.configure(source_dir, build_dir, options)
        self.backend.build(build_dir)
        self.backend.install(build_dir)


__all__ = [
    "CMakeDependency",
    "Dependency",
    "RepositoryDependency",
    "download_source",
]
