"""Operating system detection and the matching URL-open command."""

from __future__ import annotations

import sys as _sys
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "default_open_command",
    "detect_platform",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def open_command(self) -> str:
        """Shell command that opens a URL in the default browser."""
        return {
            Platform.MACOS: "open",
            Platform.WINDOWS: 'start ""',
            Platform.LINUX: "xdg-open",
            # Most remaining unixes ship xdg-utils.
            Platform.UNKNOWN: "xdg-open",
        }[self]


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    # sys.platform, not platform.system(): the latter may query WMI on Windows.
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


def default_open_command() -> str:
    return detect_platform().open_command
