"""External command execution.

This module handles:
- Running git/cmake invocations with subprocess
- Capturing stdout/stderr, optionally appending them to a log file
- Turning non-zero exits and launch failures into CommandError
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when an external command fails or cannot be started."""

    def __init__(
        self,
        message: str,
        argv: list[str] | None = None,
        exit_code: int | None = None,
        output: str = "",
        code: str = "command_failed",
    ) -> None:
        super().__init__(message)
        self.argv = argv or []
        self.exit_code = exit_code
        self.output = output
        self.code = code


@dataclass
class CommandResult:
    """Result of a successful command.

    Attributes:
        command: The command line, shell-quoted.
        exit_code: Process exit code.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    command: str
    exit_code: int
    stdout: str
    stderr: str


def run_command(
    argv: list[str],
    cwd: Path | None = None,
    log_path: Path | None = None,
) -> CommandResult:
    """Run an external command and wait for it to finish.

    Args:
        argv: Command and arguments.
        cwd: Working directory (inherits the current one if None).
        log_path: If given, command line and output are appended to this file.

    Returns:
        CommandResult for a zero exit status.

    Raises:
        CommandError: If the command exits non-zero or cannot be started.
    """
    cmd_str = shlex.join(argv)
    logger.debug("Executing: %s (cwd=%s)", cmd_str, cwd or ".")

    try:
        completed = subprocess.run(
            argv,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        message = f"Failed to execute {argv[0]}: {e}"
        logger.error(message)
        raise CommandError(message, argv=argv, code="execution_error") from e

    if log_path is not None:
        _append_log(log_path, cmd_str, cwd, completed)

    if completed.returncode != 0:
        message = f"Command failed with exit code {completed.returncode}: {cmd_str}"
        logger.error(message)
        stderr = completed.stderr.strip()
        if stderr:
            logger.error("%s", stderr)
        raise CommandError(
            message,
            argv=argv,
            exit_code=completed.returncode,
            output=completed.stdout + completed.stderr,
        )

    return CommandResult(
        command=cmd_str,
        exit_code=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


def _append_log(
    log_path: Path,
    cmd_str: str,
    cwd: Path | None,
    completed: subprocess.CompletedProcess[str],
) -> None:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as log_file:
        log_file.write(f"# Command: {cmd_str}\n")
        log_file.write(f"# Finished: {datetime.now(timezone.utc).isoformat()}\n")
        log_file.write(f"# CWD: {cwd or '.'}\n")
        log_file.write("# " + "=" * 70 + "\n")
        log_file.write(completed.stdout)
        log_file.write(completed.stderr)
        log_file.write(f"\n# Exit code: {completed.returncode}\n\n")


__all__ = ["CommandError", "CommandResult", "run_command"]
