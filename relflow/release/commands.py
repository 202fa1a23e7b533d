"""Shell command lines issued by the release flow.

Arguments are interpolated as-is; dependency specs in particular are
passed through untouched so any package-manager syntax works.
"""

from __future__ import annotations

import re

GIT_FETCH = "git fetch"
GIT_PULL_REBASE = "git pull --rebase"
GIT_ADD_ALL = "git add --all"
GIT_PUSH = "git push"

TAG_EXISTS_RE = re.compile(r"Command failed: git tag v\d+.\d+.\d+")
TAG_EXISTS_HINT = "Please delete old tag before creating a new tag: git tag -d vx.y.z"


def git_checkout(branch: str) -> str:
    return f"git checkout {branch}"


def git_commit(message: str) -> str:
    # -n is --no-verify: commit hooks do not run.
    return f'git commit -m "{message}" -n'


def git_tag(tag: str) -> str:
    return f"git tag {tag}"


def git_push_tag(remote: str, tag: str) -> str:
    return f"git push {remote} {tag}"


def package_add(package_manager: str, specs: str) -> str:
    return f"{package_manager} add {specs}"


def open_url(open_command: str, url: str) -> str:
    return f"{open_command} {url}"


def failure_text(command: str, details: str) -> str:
    """Error text shown for a failed command; also what TAG_EXISTS_RE scans."""
    text = f"Command failed: {command}"
    if details:
        text += f"\n{details}"
    return text


def tag_exists_hint(error_text: str) -> str | None:
    if TAG_EXISTS_RE.search(error_text):
        return TAG_EXISTS_HINT
    return None
