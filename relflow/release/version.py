"""Rollover versioning.

Versions are ``major.minor.patch`` where patch and minor behave like
decimal digits: ``1.2.9`` is followed by ``1.3.0`` and ``1.9.9`` by
``2.0.0``. This is a project convention, not semver.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from relflow.core.result import Err, Ok, Result
from relflow.release.errors import ReleaseError

__all__ = ["ROLLOVER", "Version", "next_version", "parse_version"]

# Value at which minor and patch wrap back to 0.
ROLLOVER = 10

_VERSION_RE = re.compile(r"^([0-9]+)\.([0-9]+)\.([0-9]+)$")


@dataclass(frozen=True, slots=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self) -> str:
        return f"v{self}"

    def next(self) -> Version:
        """Increment patch, carrying into minor and major at ROLLOVER."""
        major, minor, patch = self.major, self.minor, self.patch
        if patch == ROLLOVER - 1:
            patch = 0
            minor += 1
        else:
            patch += 1

        if minor == ROLLOVER:
            minor = 0
            major += 1

        return Version(major, minor, patch)


def parse_version(text: str) -> Result[Version, ReleaseError]:
    """Parse ``"M.m.p"``; anything but three non-negative integers is rejected."""
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"invalid version: {text!r}",
                hint="Expected MAJOR.MINOR.PATCH (e.g. 1.2.3)",
            )
        )
    return Ok(Version(int(m.group(1)), int(m.group(2)), int(m.group(3))))


def next_version(text: str) -> Result[Version, ReleaseError]:
    return parse_version(text).map(Version.next)
