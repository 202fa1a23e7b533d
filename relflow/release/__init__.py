"""Release domain and flow.

- version: rollover version arithmetic
- manifest: version field read/rewrite
- commands: shell command lines
- executor: fail-fast command execution
- prompt: interactive input
- machine / flow: the step sequence
"""

from __future__ import annotations

from relflow.release.errors import ReleaseError
from relflow.release.flow import ReleaseContext, ReleaseFlow, run_release
from relflow.release.model import ReleaseOutcome, ReleaseSession
from relflow.release.version import Version, next_version, parse_version

__all__ = [
    "ReleaseContext",
    "ReleaseError",
    "ReleaseFlow",
    "ReleaseOutcome",
    "ReleaseSession",
    "Version",
    "next_version",
    "parse_version",
    "run_release",
]
