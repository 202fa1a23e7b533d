"""Subprocess execution with Result-based error handling.

Two flavours:
- ``run`` captures stdout, for queries such as ``git rev-parse``.
- ``run_shell`` runs a shell command string attached to the terminal, so
  git progress on stderr shows up live. Only the exit code comes back.

Neither sets a timeout: an unresponsive remote blocks until it exits.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relflow.core.result import Err, Ok, Result

__all__ = [
    "CommandRunner",
    "ProcessError",
    "SubprocessRunner",
    "run",
    "run_shell",
]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed (argv, or a one-item shell string).
        returncode: Exit code, -1 if the process could not be started.
        stdout: Captured standard output (may be empty).
        stderr: Captured standard error.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def details(self) -> str:
        """Best available diagnostic text."""
        return self.stderr.strip() or self.stdout.strip()

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Execute ``cmd`` and return its stdout.

    Returns:
        Ok(stdout) on exit 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )
    return Ok(proc.stdout)


def run_shell(
    command: str,
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a shell command string with stdout and stderr inherited.

    The string is handed to the shell as-is; callers own quoting.

    Returns:
        Ok(None) on exit 0, Err(ProcessError) with empty output otherwise.
    """
    try:
        proc = subprocess.run(
            command,
            shell=True,
            cwd=str(cwd),
            env=env,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=(command,), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=(command,),
                returncode=proc.returncode,
                stdout="",
                stderr="",
            )
        )
    return Ok(None)


class CommandRunner(Protocol):
    """Seam between the release flow and real processes."""

    def shell(self, command: str, cwd: Path) -> Result[None, ProcessError]:
        """Run a shell command string attached to the terminal."""
        ...

    def capture(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        """Run an argv command and capture stdout."""
        ...


class SubprocessRunner:
    """Production runner backed by ``subprocess``."""

    def shell(self, command: str, cwd: Path) -> Result[None, ProcessError]:
        return run_shell(command, cwd)

    def capture(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        return run(cmd, cwd)
