"""Tests for configuration module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from raftdeps.config import Settings, get_settings, print_settings_json


class TestSettings:
    """Test Settings class."""

    def test_default_settings(self) -> None:
        """Settings should have sensible defaults."""
        settings = Settings()

        assert settings.project_dir == Path.cwd()
        assert settings.manifest_name == "raft.yaml"
        assert settings.dependencies_dirname == "dependencies"
        assert settings.build_dirname == "build"
        assert settings.git_executable == "git"
        assert settings.cmake_executable == "cmake"
        assert settings.cmake_generator is None
        assert settings.log_level == "INFO"
        assert settings.lock_timeout is None

    def test_settings_from_env(self) -> None:
        """Settings should be loadable from environment variables."""
        with patch.dict(
            os.environ,
            {
                "RAFT_LOG_LEVEL": "DEBUG",
                "RAFT_CMAKE_GENERATOR": "Ninja",
                "RAFT_LOCK_TIMEOUT": "30",
            },
        ):
            settings = Settings()
            assert settings.log_level == "DEBUG"
            assert settings.cmake_generator == "Ninja"
            assert settings.lock_timeout == 30.0

    def test_project_dir_from_env(self) -> None:
        """Project dir should be configurable via env."""
        with patch.dict(os.environ, {"RAFT_PROJECT_DIR": "/tmp/raft-project"}):
            settings = Settings()
            assert settings.project_dir == Path("/tmp/raft-project")

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_lock_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(lock_timeout=0)


class TestGetSettings:
    """Test get_settings function."""

    def test_get_settings_returns_settings(self) -> None:
        """get_settings should return a Settings instance."""
        settings = get_settings()
        assert isinstance(settings, Settings)


class TestPrintSettingsJson:
    """Test print_settings_json function."""

    def test_print_settings_json(self) -> None:
        """print_settings_json should return valid JSON."""
        settings = Settings()
        json_str = print_settings_json(settings)

        parsed = json.loads(json_str)

        assert "project_dir" in parsed
        assert "cmake_executable" in parsed
        assert "lock_timeout" in parsed

    def test_print_settings_json_default(self) -> None:
        """print_settings_json without args should use default settings."""
        json_str = print_settings_json()
        parsed = json.loads(json_str)
        assert "manifest_name" in parsed
