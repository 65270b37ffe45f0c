"""Thin CLI wrapper for raftdeps.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from raftdeps import __version__
from raftdeps.config import Settings, get_settings, print_settings_json
from raftdeps.logging_config import configure_logging
from raftdeps.project import Project

app = typer.Typer(
    name="raftdeps",
    help="raft dependencies - fetch, patch, build and install native dependencies",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"raftdeps version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", "-l", help="Override the configured log level"),
    ] = None,
) -> None:
    """raft dependencies - fetch, patch, build and install native dependencies."""
    level = log_level or get_settings().log_level
    try:
        configure_logging(level)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=2) from None


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(print_settings_json(settings), soft_wrap=True)
        return

    lock_timeout_display = (
        f"{settings.lock_timeout}s" if settings.lock_timeout else "(wait forever)"
    )
    console.print("[bold]Effective Configuration:[/bold]")
    console.print()
    console.print("[bold]Project layout:[/bold]")
    console.print(f"  Project directory:   {settings.project_dir}")
    console.print(f"  Manifest:            {settings.manifest_name}")
    console.print(f"  Dependencies dir:    {settings.dependencies_dirname}")
    console.print(f"  Build dir:           {settings.build_dirname}")
    console.print()
    console.print("[bold]Tools:[/bold]")
    console.print(f"  git:                 {settings.git_executable}")
    console.print(f"  cmake:               {settings.cmake_executable}")
    console.print(f"  CMake generator:     {settings.cmake_generator or '(default)'}")
    console.print()
    console.print("[bold]Operational:[/bold]")
    console.print(f"  Log level:           {settings.log_level}")
    console.print(f"  Lock timeout:        {lock_timeout_display}")


deps_app = typer.Typer(help="Manage project dependencies")
app.add_typer(deps_app, name="deps")


def _resolve_project(settings: Settings, project_dir: str | None) -> Project:
    root = Path(project_dir) if project_dir else None
    return Project.from_settings(settings, root=root)


def _resolve_manifest(project: Project, manifest: str | None) -> Path:
    return Path(manifest) if manifest else project.manifest_path


@deps_app.command("list")
def deps_list(
    manifest: Annotated[
        str | None,
        typer.Option("--manifest", "-m", help="Manifest file (default: <project>/raft.yaml)"),
    ] = None,
    project_dir: Annotated[
        str | None,
        typer.Option("--project-dir", "-C", help="Project root directory"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List dependencies declared in the manifest."""
    from raftdeps.dependencies.io import ManifestError, load_manifest

    settings = get_settings()
    project = _resolve_project(settings, project_dir)
    manifest_path = _resolve_manifest(project, manifest)

    try:
        schema = load_manifest(manifest_path)
    except ManifestError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from None

    if json_output:
        output = [dep.model_dump(mode="json") for dep in schema.dependencies]
        console.print(json.dumps(output, indent=2), soft_wrap=True)
        return

    if not schema.dependencies:
        console.print("[yellow]No dependencies declared[/yellow]")
        return

    console.print(f"[bold]Found {len(schema.dependencies)} dependency(ies):[/bold]")
    console.print()
    for dep in schema.dependencies:
        downloaded = project.dir_for_dependency(dep.name).exists()
        status = "[green]downloaded[/green]" if downloaded else "[dim]not downloaded[/dim]"
        console.print(f"  [green]{dep.name}[/green] ({dep.kind.value}) {status}")
        branch = f" @ {dep.repository.branch}" if dep.repository.branch else ""
        console.print(f"    Repository: {dep.repository.uri}{branch}")
        if dep.patches:
            console.print(f"    Patches: {', '.join(dep.patches)}")
        if dep.config_options:
            options = ", ".join(f"{k}={v}" for k, v in dep.config_options.items())
            console.print(f"    Config: {options}")
        console.print()


@deps_app.command("get")
def deps_get(
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Dependencies to get (default: all, in manifest order)"),
    ] = None,
    deploy: Annotated[
        bool,
        typer.Option("--deploy/--debug", help="Release (deploy) or debug build"),
    ] = False,
    manifest: Annotated[
        str | None,
        typer.Option("--manifest", "-m", help="Manifest file (default: <project>/raft.yaml)"),
    ] = None,
    project_dir: Annotated[
        str | None,
        typer.Option("--project-dir", "-C", help="Project root directory"),
    ] = None,
) -> None:
    """Download, build and install dependencies."""
    from raftdeps.build_config import Build
    from raftdeps.dependencies.io import ManifestError, load_dependencies
    from raftdeps.dependencies.service import (
        DependencyError,
        DependencyNotFoundError,
        get_dependencies,
    )
    from raftdeps.process import CommandError

    settings = get_settings()
    project = _resolve_project(settings, project_dir)
    manifest_path = _resolve_manifest(project, manifest)
    build = Build(is_deploy=deploy)

    try:
        dependencies = load_dependencies(manifest_path, settings)
        if names:
            by_name = {dep.name: dep for dep in dependencies}
            missing = [name for name in names if name not in by_name]
            if missing:
                raise DependencyNotFoundError(missing[0])
            dependencies = [by_name[name] for name in names]

        get_dependencies(
            project,
            build,
            dependencies,
            lock_timeout=settings.lock_timeout,
        )
    except (ManifestError, DependencyError, CommandError, TimeoutError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from None

    console.print(
        f"[green]{len(dependencies)} dependency(ies) ready in "
        f"{project.dir_for_dependency_install(build)}[/green]"
    )


@deps_app.command("clean")
def deps_clean(
    name: Annotated[str, typer.Argument(help="Dependency to remove")],
    build_tree: Annotated[
        bool,
        typer.Option("--build", "-b", help="Also remove the build tree"),
    ] = False,
    deploy: Annotated[
        bool,
        typer.Option("--deploy/--debug", help="Build configuration for --build"),
    ] = False,
    project_dir: Annotated[
        str | None,
        typer.Option("--project-dir", "-C", help="Project root directory"),
    ] = None,
) -> None:
    """Remove a dependency's downloaded source so it is fetched again."""
    from raftdeps.build_config import Build
    from raftdeps.dependencies.service import DependencyError, clean_dependency

    settings = get_settings()
    project = _resolve_project(settings, project_dir)
    build = Build(is_deploy=deploy) if build_tree else None

    try:
        removed = clean_dependency(
            project, name, build=build, lock_timeout=settings.lock_timeout
        )
    except (DependencyError, TimeoutError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from None

    if not removed:
        console.print(f"[yellow]Nothing to remove for {name}[/yellow]")
        return
    for path in removed:
        console.print(f"[green]Removed {path}[/green]")


if __name__ == "__main__":
    app()
