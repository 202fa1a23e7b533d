"""Exit codes for the relflow CLI.

The release flow has exactly two process outcomes: it either finished
(including a voluntary stop at a confirmation prompt) or something failed.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Keep the numeric values stable."""

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()
