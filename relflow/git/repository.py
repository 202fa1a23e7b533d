"""Git repository queries.

Only the read-side queries live here (current branch, remote URL). The
release flow's mutating git commands are shell strings executed through
``CommandExecutor`` so they stream to the terminal.

Usage:
    repo = Repository(Path("."))
    match repo.info(remote="origin", host="github.com"):
        case Ok(info):
            print(compare_url(info, base="main"))
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from relflow.core.result import Err, Ok, Result
from relflow.platform.process import CommandRunner, ProcessError, SubprocessRunner

__all__ = [
    "GitError",
    "RepoInfo",
    "Repository",
    "compare_url",
    "normalize_remote_url",
]

_URL_SEPARATORS = re.compile(r"[:/]")


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git query.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class RepoInfo:
    """Current branch and web URL of the remote."""

    branch: str
    repo_url: str


def normalize_remote_url(url: str, *, host: str = "github.com") -> str:
    """Turn a git remote URL into the repository's web URL.

    Both SSH (``git@github.com:owner/repo.git``) and HTTPS remotes keep
    their last two path segments; a trailing ``.git`` is dropped.
    """
    segments = [s for s in _URL_SEPARATORS.split(url.strip()) if s]
    slug = "/".join(segments[-2:])
    slug = slug.removesuffix(".git")
    return f"https://{host}/{slug}"


def compare_url(info: RepoInfo, *, base: str = "main") -> str:
    return f"{info.repo_url}/compare/{base}...{info.branch}"


class Repository:
    """Read-only view of a git working tree."""

    def __init__(self, path: Path, runner: CommandRunner | None = None) -> None:
        self.path = path
        self._runner: CommandRunner = runner if runner is not None else SubprocessRunner()

    def current_branch(self) -> Result[str, GitError]:
        """Name of the checked-out branch.

        Detached HEAD is an error: there is no branch to compare.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Err(e):
                return Err(_git_error("rev-parse", e, "cannot determine current branch"))
            case Ok(stdout):
                branch = stdout.strip()
                if not branch or branch == "HEAD":
                    return Err(GitError(command="rev-parse", message="detached HEAD"))
                return Ok(branch)

    def remote_url(self, remote: str = "origin") -> Result[str, GitError]:
        result = self._run(["remote", "get-url", remote])
        match result:
            case Err(e):
                return Err(_git_error("remote get-url", e, f"no remote named {remote}"))
            case Ok(stdout):
                url = stdout.strip()
                if not url:
                    return Err(GitError(command="remote get-url", message=f"empty url for {remote}"))
                return Ok(url)

    def info(self, *, remote: str = "origin", host: str = "github.com") -> Result[RepoInfo, GitError]:
        branch = self.current_branch()
        if isinstance(branch, Err):
            return branch
        url = self.remote_url(remote)
        if isinstance(url, Err):
            return url
        return Ok(RepoInfo(branch=branch.value, repo_url=normalize_remote_url(url.value, host=host)))

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return self._runner.capture(["git", *args], self.path)


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.details or fallback,
        returncode=error.returncode,
    )
