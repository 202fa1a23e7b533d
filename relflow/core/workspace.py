"""Workspace detection.

The workspace is the git repository being released. Its root is the nearest
directory, walking up from the current directory, that contains ``.git``
(a directory, or a file for worktrees).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILE_NAME
from .result import Err, Ok, Result

__all__ = [
    "Workspace",
    "WorkspaceError",
    "detect_workspace",
    "find_repo_root",
]


@dataclass(frozen=True)
class WorkspaceError:
    """Error when no repository root can be found."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Workspace:
    """The repository a release runs against."""

    root: Path

    @property
    def config_path(self) -> Path:
        """Path to the optional .relflow.toml."""
        return self.root / CONFIG_FILE_NAME

    def manifest_path(self, manifest: str) -> Path:
        """Resolve a manifest path relative to the root."""
        return self.root / manifest


def find_repo_root(start: Path) -> Path | None:
    """Walk up from ``start`` to the first directory holding ``.git``."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def detect_workspace(start: Path | None = None) -> Result[Workspace, WorkspaceError]:
    """Detect the workspace from ``start`` (default: the current directory)."""
    origin = start if start is not None else Path.cwd()
    root = find_repo_root(origin)
    if root is None:
        return Err(
            WorkspaceError(
                message=f"not inside a git repository: {origin}",
                searched_from=origin,
            )
        )
    return Ok(Workspace(root=root))
