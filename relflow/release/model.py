from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relflow.release.version import Version

ReleaseStep = Literal[
    "select_branch",
    "update_dependencies",
    "bump_version",
    "open_compare",
    "confirm_merge",
    "tag_release",
]

# How a run that did not fail came to an end.
ReleaseOutcome = Literal["completed", "merge_cancelled", "manual_tag"]


@dataclass(frozen=True, slots=True)
class ReleaseSession:
    step: ReleaseStep = "select_branch"
    branch: str | None = None
    current_version: Version | None = None
    new_version: Version | None = None
