"""Git repository queries."""

from relflow.git.repository import (
    GitError,
    RepoInfo,
    Repository,
    compare_url,
    normalize_remote_url,
)

__all__ = [
    "GitError",
    "RepoInfo",
    "Repository",
    "compare_url",
    "normalize_remote_url",
]
