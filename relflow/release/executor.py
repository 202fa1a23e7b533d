"""Fail-fast execution of release commands.

Every command either succeeds (and is reported as done) or ends the run:
the executor reports the failure on the console and hands back a
``command_failed`` error that the flow propagates untouched. There is no
retry and no rollback.
"""

from __future__ import annotations

from pathlib import Path

from relflow.core.result import Err, Ok, Result
from relflow.output.console import ConsoleProtocol
from relflow.platform.process import CommandRunner
from relflow.release.commands import failure_text, tag_exists_hint
from relflow.release.errors import ReleaseError

__all__ = ["CommandExecutor"]


class CommandExecutor:
    def __init__(self, *, runner: CommandRunner, console: ConsoleProtocol, cwd: Path) -> None:
        self._runner = runner
        self._console = console
        self._cwd = cwd

    def execute(self, command: str) -> Result[None, ReleaseError]:
        """Run one shell command.

        Returns:
            Ok(None) on exit 0, Err(command_failed) otherwise.
        """
        result = self._runner.shell(command, self._cwd)
        if isinstance(result, Ok):
            self._console.success(f"==done==: {command}")
            self._console.newline()
            return Ok(None)

        error = result.error
        text = failure_text(command, error.details or f"exit code {error.returncode}")
        hint = tag_exists_hint(text)
        self._console.error(text)
        self._console.error(f"Error executing command: {command}")
        if hint is not None:
            self._console.error(hint)

        return Err(
            ReleaseError(
                kind="command_failed",
                message=f"Error executing command: {command}",
                hint=hint,
            )
        )

    def execute_all(self, *commands: str) -> Result[None, ReleaseError]:
        """Run commands in order, stopping at the first failure."""
        for command in commands:
            result = self.execute(command)
            if isinstance(result, Err):
                return result
        return Ok(None)
