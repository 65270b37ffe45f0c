"""Version control repositories.

A repository knows how to download (clone or update) source into a
directory and how to apply a patch file to a checkout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from raftdeps.process import run_command

logger = logging.getLogger(__name__)


class Repository(Protocol):
    """Fetch and patch primitive used by dependencies."""

    def download(self, destination: Path) -> None:
        """Download the repository to destination, updating it if present."""

    def patch(self, repo_dir: Path, patch: Path) -> None:
        """Apply a patch file to the checkout in repo_dir."""


@dataclass(frozen=True)
class GitRepository:
    """Repository implementation backed by the git command line.

    Attributes:
        uri: URI the repository can be cloned from.
        branch: Optional branch, tag or commit to check out after cloning.
        git: git executable.
    """

    uri: str
    branch: str | None = None
    git: str = "git"

    def download(self, destination: Path) -> None:
        """Clone into destination unless it exists, then check out the branch.

        Raises:
            CommandError: If a git command fails.
        """
        if not destination.exists():
            logger.info("Cloning %s into %s", self.uri, destination)
            destination.parent.mkdir(parents=True, exist_ok=True)
            run_command([self.git, "clone", self.uri, str(destination)])
        if self.branch:
            logger.info("Checking out %s in %s", self.branch, destination)
            run_command([self.git, "checkout", self.branch], cwd=destination)

    def patch(self, repo_dir: Path, patch: Path) -> None:
        """Apply patch with `git apply`.

        Skipped without error if either the checkout or the patch file is
        missing.

        Raises:
            CommandError: If `git apply` fails.
        """
        if not (repo_dir.exists() and patch.exists()):
            logger.debug("Skipping patch %s for %s: path missing", patch, repo_dir)
            return
        logger.info("Applying patch %s", patch)
        run_command([self.git, "apply", str(patch.resolve())], cwd=repo_dir)


__all__ = ["GitRepository", "Repository"]
