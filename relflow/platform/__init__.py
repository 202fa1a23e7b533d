"""Platform abstraction layer."""

from .detection import Platform, default_open_command, detect_platform
from .process import CommandRunner, ProcessError, SubprocessRunner, run, run_shell

__all__ = [
    # detection
    "Platform",
    "default_open_command",
    "detect_platform",
    # process
    "CommandRunner",
    "ProcessError",
    "SubprocessRunner",
    "run",
    "run_shell",
]
