"""Dependency management module.

This module handles:
- The Dependency contract and its repository/CMake variants
- Orchestrating download then build/install for a dependency
- Locking against concurrent work on the same dependency or install prefix
- Loading dependency manifests
"""

from raftdeps.dependencies.models import (
    CMakeDependency,
    Dependency,
    RepositoryDependency,
    download_source,
)
from raftdeps.dependencies.schema import (
    DependencyDescriptor,
    DependencySchema,
    ManifestSchema,
    RepositorySchema,
)
from raftdeps.dependencies.service import (
    DependencyError,
    DependencyNotFoundError,
    DuplicateDependencyError,
    clean_dependency,
    dependency_lock,
    get_dependencies,
    get_dependency,
    install_lock,
)

__all__ = [
    # Models
    "CMakeDependency",
    "Dependency",
    "RepositoryDependency",
    "download_source",
    # Schema
    "DependencyDescriptor",
    "DependencySchema",
    "ManifestSchema",
    "RepositorySchema",
    # Service
    "DependencyError",
    "DependencyNotFoundError",
    "DuplicateDependencyError",
    "clean_dependency",
    "dependency_lock",
    "get_dependencies",
    "get_dependency",
    "install_lock",
]
