"""Shared fixtures for raftdeps tests."""

import logging

import pytest
from fakes import FakeBackend, FakeRepository

from raftdeps.build_config import Build
from raftdeps.project import Project


@pytest.fixture
def calls() -> list:
    """Shared call log for fakes."""
    return []


@pytest.fixture
def project(tmp_path) -> Project:
    """Project rooted in a temporary directory."""
    return Project(root=tmp_path)


@pytest.fixture
def debug_build() -> Build:
    return Build()


@pytest.fixture
def fake_repository(calls) -> FakeRepository:
    return FakeRepository(calls)


@pytest.fixture
def fake_backend(calls) -> FakeBackend:
    return FakeBackend(calls)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handlers installed by configure_logging (e.g. via the CLI)."""
    logger = logging.getLogger("raftdeps")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
