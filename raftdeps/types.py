"""Shared type definitions for raftdeps.

This module contains enums and type aliases shared across subpackages
to avoid circular imports.
"""

from enum import Enum


class Platform(str, Enum):
    """Target platform of a build."""

    HOST = "host"


class Architecture(str, Enum):
    """Target CPU architecture of a build."""

    HOST = "host"


class DependencyKind(str, Enum):
    """How a dependency is turned into something the root project can use."""

    REPOSITORY = "repository"
    CMAKE = "cmake"


class DependencyState(str, Enum):
    """Progress of a single dependency within one build invocation."""

    NOT_STARTED = "not_started"
    DOWNLOADING = "downloading"
    DOWNLOADED = "downloaded"
    BUILDING = "building"
    READY = "ready"
    FAILED = "failed"


# Values accepted as backend config options (e.g. CMake cache variables)
ConfigValue = str | int | float | bool


__all__ = [
    "Architecture",
    "ConfigValue",
    "DependencyKind",
    "DependencyState",
    "Platform",
]
