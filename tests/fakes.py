"""Recording fakes for repositories and build backends."""

from pathlib import Path

from raftdeps.backends.base import BuildOptions


class FakeRepository:
    """Repository that creates the destination directory and records calls."""

    def __init__(self, calls: list, fail_on_patch: str | None = None) -> None:
        self.calls = calls
        self.fail_on_patch = fail_on_patch

    def download(self, destination: Path) -> None:
        self.calls.append(("repo.download", destination))
        destination.mkdir(parents=True, exist_ok=True)

    def patch(self, repo_dir: Path, patch: Path) -> None:
        self.calls.append(("repo.patch", patch.name))
        if self.fail_on_patch == patch.name:
            raise RuntimeError(f"patch {patch.name} does not apply")


class FakeBackend:
    """Build backend recording each step, optionally failing one of them."""

    def __init__(self, calls: list, fail_on: str | None = None) -> None:
        self.calls = calls
        self.fail_on = fail_on
        self.options: BuildOptions | None = None

    def _step(self, name: str) -> None:
        self.calls.append((f"backend.{name}",))
        if self.fail_on == name:
            raise RuntimeError(f"{name} failed")

    def configure(self, source_dir: Path, build_dir: Path, options: BuildOptions) -> None:
        self.options = options
        self._step("configure")

    def build(self, build_dir: Path) -> None:
        self._step("build")

    def install(self, build_dir: Path) -> None:
        self._step("install")
