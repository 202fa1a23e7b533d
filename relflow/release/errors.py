from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "command_failed",
    "repo_info_failed",
    "invalid_version",
    "manifest_invalid",
    "manifest_io",
    "invalid_input",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
