"""Configuration settings for raftdeps.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the RAFT_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="RAFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Project layout
    project_dir: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the raft project",
    )
    manifest_name: str = Field(
        default="raft.yaml",
        description="Dependency manifest file name, relative to the project root",
    )
    dependencies_dirname: str = Field(
        default="dependencies",
        description="Directory (under the project root) holding dependency sources",
    )
    build_dirname: str = Field(
        default="build",
        description="Directory (under the project root) holding build trees and installs",
    )

    # External tools
    git_executable: str = Field(default="git", description="git executable")
    cmake_executable: str = Field(default="cmake", description="cmake executable")
    cmake_generator: str | None = Field(
        default=None,
        description="CMake generator (uses CMake's default if not set)",
    )

    # Operational
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    lock_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for dependency/install locks (blocks if not set)",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
