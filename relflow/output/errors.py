"""Error presentation for release failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relflow.core.errors import ErrorCode
from relflow.output.console import Style
from relflow.release.errors import ReleaseError

if TYPE_CHECKING:
    from relflow.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    match error:
        case ReleaseError(kind="command_failed"):
            # CommandExecutor already reported the command and its output.
            pass
        case ReleaseError(message=message, hint=hint):
            console.error(message)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    # Every failure kind maps to the same code.
    return int(ErrorCode.FAILURE)
