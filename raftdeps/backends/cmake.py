"""CMake build backend.

This module handles:
- Composing `cmake` configure commands from BuildOptions
- Running configure, build and install against a build tree
- Appending command output to <build_dir>/cmake.log
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from raftdeps.backends.base import BuildOptions
from raftdeps.process import run_command
from raftdeps.types import ConfigValue, Platform

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "cmake.log"


def format_cache_value(value: ConfigValue) -> str:
    """Format a config value as a CMake cache entry value.

    Booleans become ON/OFF, everything else is stringified.
    """
    if isinstance(value, bool):
        return "ON" if value else "OFF"
    return str(value)


def platform_args(platform: Platform) -> list[str]:
    """Return extra configure arguments selecting the target platform."""
    if platform is Platform.HOST:
        return []
    raise ValueError(f"Unsupported platform: {platform}")


def compose_configure_command(
    source_dir: Path,
    build_dir: Path,
    options: BuildOptions,
    cmake: str = "cmake",
    generator: str | None = None,
) -> list[str]:
    """Compose the `cmake` configure command.

    Args:
        source_dir: Directory containing the top-level CMakeLists.txt.
        build_dir: Build tree directory.
        options: Build options.
        cmake: cmake executable.
        generator: Optional CMake generator name.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    cmd = [cmake, "-S", str(source_dir), "-B", str(build_dir)]

    if generator:
        cmd.extend(["-G", generator])

    cmd.append(f"-DCMAKE_INSTALL_PREFIX={options.install_prefix}")
    build_type = "Release" if options.release else "Debug"
    cmd.append(f"-DCMAKE_BUILD_TYPE={build_type}")
    # Multi-config generators ignore CMAKE_BUILD_TYPE; offer only the requested config
    cmd.append(f"-DCMAKE_CONFIGURATION_TYPES={build_type}")
    # Lets dependencies find packages installed earlier into the same prefix
    cmd.append(f"-DCMAKE_PREFIX_PATH={options.install_prefix}")

    cmd.extend(platform_args(options.platform))

    for key, value in options.config_options.items():
        cmd.append(f"-D{key}={format_cache_value(value)}")

    return cmd


@dataclass(frozen=True)
class CMakeBackend:
    """Build backend driving the cmake command line.

    Attributes:
        cmake: cmake executable.
        generator: Optional CMake generator.
    """

    cmake: str = "cmake"
    generator: str | None = None

    def configure(self, source_dir: Path, build_dir: Path, options: BuildOptions) -> None:
        """Configure a build tree.

        Raises:
            CommandError: If cmake fails.
        """
        build_dir.mkdir(parents=True, exist_ok=True)
        cmd = compose_configure_command(
            source_dir,
            build_dir,
            options,
            cmake=self.cmake,
            generator=self.generator,
        )
        logger.info("Configuring %s", source_dir)
        run_command(cmd, log_path=build_dir / LOG_FILE_NAME)

    def build(self, build_dir: Path) -> None:
        """Build a configured tree.

        Raises:
            CommandError: If cmake fails.
        """
        logger.info("Compiling %s", build_dir)
        run_command(
            [self.cmake, "--build", str(build_dir)],
            log_path=build_dir / LOG_FILE_NAME,
        )

    def install(self, build_dir: Path) -> None:
        """Install a built tree into its configured prefix.

        Raises:
            CommandError: If cmake fails.
        """
        logger.info("Installing %s", build_dir)
        run_command(
            [self.cmake, "--install", str(build_dir)],
            log_path=build_dir / LOG_FILE_NAME,
        )


__all__ = [
    "CMakeBackend",
    "compose_configure_command",
    "format_cache_value",
    "platform_args",
]
