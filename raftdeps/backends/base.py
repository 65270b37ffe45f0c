"""Build backend contract."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from raftdeps.types import ConfigValue, Platform


@dataclass(frozen=True)
class BuildOptions:
    """Options for configuring a dependency build.

    Attributes:
        install_prefix: Directory artifacts are installed to.
        release: True for an optimized release build, False for debug.
        platform: Target platform.
        config_options: Backend-specific key/value pairs, passed verbatim.
    """

    install_prefix: Path
    release: bool = False
    platform: Platform = Platform.HOST
    config_options: Mapping[str, ConfigValue] = field(default_factory=dict)


class BuildBackend(Protocol):
    """Three-step pipeline compiling dependency source into an install prefix."""

    def configure(self, source_dir: Path, build_dir: Path, options: BuildOptions) -> None:
        """Generate the build tree in build_dir from source_dir."""

    def build(self, build_dir: Path) -> None:
        """Compile the configured build tree."""

    def install(self, build_dir: Path) -> None:
        """Install the build tree's artifacts into the configured prefix."""


__all__ = ["BuildBackend", "BuildOptions"]
