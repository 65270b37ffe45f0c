"""Build configuration value object."""

from dataclasses import dataclass

from raftdeps.types import Architecture, Platform


@dataclass(frozen=True)
class Build:
    """Configuration of a single build invocation.

    Attributes:
        platform: Target platform.
        architecture: Target architecture.
        is_deploy: True for a release (deploy) build, False for debug.
    """

    platform: Platform = Platform.HOST
    architecture: Architecture = Architecture.HOST
    is_deploy: bool = False

    @property
    def variant(self) -> str:
        """Return 'release' or 'debug'."""
        return "release" if self.is_deploy else "debug"

    @property
    def tag(self) -> str:
        """Directory-safe identifier of this configuration."""
        return f"{self.platform.value}-{self.architecture.value}-{self.variant}"


__all__ = ["Build"]
