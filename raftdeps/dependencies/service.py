"""Dependency orchestration.

This module provides the high-level dependency API:
- get_dependency(): Download, build and install a single dependency
- get_dependencies(): Drive several dependencies serially, in order
- clean_dependency(): Remove a dependency's source (and build tree)

get_dependency() holds a file lock per dependency name so two processes
cannot both see a missing source directory and clone into it, and a lock
per build configuration around build_install so installs into the shared
prefix do not interleave.
"""

from __future__ import annotations

import fcntl
import logging
import os
import shutil
import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from raftdeps.dependencies.schema import DEPENDENCY_NAME_PATTERN
from raftdeps.types import DependencyState

if TYPE_CHECKING:
    from raftdeps.build_config import Build
    from raftdeps.dependencies.models import Dependency
    from raftdeps.project import Project

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, DependencyState], None]


class DependencyError(Exception):
    """Base error for dependency operations."""

    def __init__(self, message: str, code: str = "dependency_error") -> None:
        super().__init__(message)
        self.code = code


class DuplicateDependencyError(DependencyError):
    """Raised when two dependencies of one build share a name."""

    def __init__(self, names: Sequence[str]) -> None:
        super().__init__(
            f"Duplicate dependency names: {', '.join(names)}",
            code="duplicate_dependency",
        )
        self.names = list(names)


class DependencyNotFoundError(DependencyError):
    """Raised when a requested dependency is not declared."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Dependency not found: {name}", code="dependency_not_found")
        self.name = name


@contextmanager
def file_lock(lock_file: Path, timeout: float | None = None) -> Iterator[None]:
    """Hold an exclusive flock on lock_file.

    Args:
        lock_file: Lock file path (created if missing).
        timeout: Lock acquisition timeout in seconds (None = blocking).

    Yields:
        None when lock is acquired.

    Raises:
        TimeoutError: If lock cannot be acquired within timeout.
    """
    lock_file.parent.mkdir(parents=True, exist_ok=True)

    fd = os.open(str(lock_file), os.O_RDWR | os.O_CREAT, 0o600)
    try:
        if timeout is not None:
            start = time.monotonic()
            while True:
                try:
                    fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                    break
                except BlockingIOError as e:
                    if time.monotonic() - start >= timeout:
                        raise TimeoutError(f"Timeout waiting for lock {lock_file}") from e
                    time.sleep(0.1)
        else:
            fcntl.flock(fd, fcntl.LOCK_EX)

        logger.debug("Lock acquired: %s", lock_file)
        yield
    finally:
        fcntl.flock(fd, fcntl.LOCK_UN)
        os.close(fd)
        logger.debug("Lock released: %s", lock_file)


def dependency_lock(
    project: Project, name: str, timeout: float | None = None
) -> AbstractContextManager[None]:
    """Lock serializing all work on one dependency's source directory."""
    return file_lock(project.lock_dir / f"dependency_{name}.lock", timeout=timeout)


def install_lock(
    project: Project, build: Build, timeout: float | None = None
) -> AbstractContextManager[None]:
    """Lock serializing installs into one build configuration's prefix."""
    return file_lock(project.lock_dir / f"install_{build.tag}.lock", timeout=timeout)


def log_progress(name: str, message: str) -> None:
    """Emit a progress line for a dependency."""
    logger.info("[%s] %s", name, message)


def get_dependency(
    project: Project,
    build: Build,
    dependency: Dependency,
    progress: ProgressCallback | None = None,
    lock_timeout: float | None = None,
) -> None:
    """Download, build and install a dependency.

    Download always completes before build_install starts. If download
    fails, build_install is not called. Errors propagate unchanged; nothing
    is retried or cleaned up, so a partially downloaded source directory
    has to be removed (see clean_dependency) before trying again.

    Args:
        project: Root raft project.
        build: Configuration of the current build.
        dependency: Dependency to make ready.
        progress: Optional callback receiving (name, state) transitions.
        lock_timeout: Seconds to wait for locks (None = blocking).

    Raises:
        TimeoutError: If a lock cannot be acquired within lock_timeout.
        CommandError: If fetching, patching or a build step fails.
    """
    name = dependency.name

    def report(state: DependencyState) -> None:
        if progress is not None:
            progress(name, state)

    with dependency_lock(project, name, timeout=lock_timeout):
        state = DependencyState.DOWNLOADING
        try:
            log_progress(name, "Downloading")
            report(state)
            dependency.download(project, build)
            report(DependencyState.DOWNLOADED)

            state = DependencyState.BUILDING
            with install_lock(project, build, timeout=lock_timeout):
                log_progress(name, "Building")
                report(state)
                dependency.build_install(project, build)
        except Exception:
            logger.error("[%s] Failed while %s", name, state.value)
            report(DependencyState.FAILED)
            raise

        log_progress(name, "Ready")
        report(DependencyState.READY)


def find_duplicate_names(dependencies: Iterable[Dependency]) -> list[str]:
    """Return names declared more than once, in first-seen order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for dependency in dependencies:
        if dependency.name in seen and dependency.name not in duplicates:
            duplicates.append(dependency.name)
        seen.add(dependency.name)
    return duplicates


def get_dependencies(
    project: Project,
    build: Build,
    dependencies: Sequence[Dependency],
    progress: ProgressCallback | None = None,
    lock_timeout: float | None = None,
) -> None:
    """Make several dependencies ready, one after another in the given order.

    Stops at the first failure.

    Raises:
        DuplicateDependencyError: If two dependencies share a name. Raised
            before any dependency is touched.
    """
    duplicates = find_duplicate_names(dependencies)
    if duplicates:
        raise DuplicateDependencyError(duplicates)

    for dependency in dependencies:
        get_dependency(
            project,
            build,
            dependency,
            progress=progress,
            lock_timeout=lock_timeout,
        )


def clean_dependency(
    project: Project,
    name: str,
    build: Build | None = None,
    lock_timeout: float | None = None,
) -> list[Path]:
    """Remove a dependency's source directory, and its build tree for build.

    Args:
        project: Root raft project.
        name: Dependency name.
        build: If given, the build tree for this configuration is removed too.
        lock_timeout: Seconds to wait for the dependency lock.

    Returns:
        Paths that were removed.

    Raises:
        DependencyError: If name is not a valid dependency name.
    """
    if name in {".", ".."} or not DEPENDENCY_NAME_PATTERN.match(name):
        raise DependencyError(f"Invalid dependency name: {name}", code="invalid_name")

    targets = [project.dir_for_dependency(name)]
    if build is not None:
        targets.append(project.dir_for_dependency_build(name, build))

    removed: list[Path] = []
    with dependency_lock(project, name, timeout=lock_timeout):
        for path in targets:
            if path.exists():
                logger.info("[%s] Removing %s", name, path)
                shutil.rmtree(path)
                removed.append(path)
    return removed


__all__ = [
    "DependencyError",
    "DependencyNotFoundError",
    "DuplicateDependencyError",
    "ProgressCallback",
    "clean_dependency",
    "dependency_lock",
    "file_lock",
    "find_duplicate_names",
    "get_dependencies",
    "get_dependency",
    "install_lock",
    "log_progress",
]
