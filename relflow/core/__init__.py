"""Core types: results, exit codes, configuration, workspace."""

from .config import ConfigError, ReleaseConfig, load_config, load_config_or_default
from .errors import ErrorCode
from .result import Err, Ok, Result
from .workspace import Workspace, WorkspaceError, detect_workspace

__all__ = [
    # config
    "ConfigError",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    # workspace
    "Workspace",
    "WorkspaceError",
    "detect_workspace",
]
