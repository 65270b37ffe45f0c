"""Build backends.

This module handles:
- The configure/build/install contract dependencies drive
- The options object carrying install prefix, release flag, platform
  and backend-specific config values
- The CMake implementation
"""

from raftdeps.backends.base import BuildBackend, BuildOptions
from raftdeps.backends.cmake import CMakeBackend, compose_configure_command

__all__ = [
    "BuildBackend",
    "BuildOptions",
    "CMakeBackend",
    "compose_configure_command",
]
