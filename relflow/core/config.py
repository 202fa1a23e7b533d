"""Typed release configuration.

Settings come from an optional ``.relflow.toml`` at the repository root:

    manifest = "package.json"
    base_branch = "main"
    default_branch = "develop"
    remote = "origin"
    package_manager = "yarn"
    web_host = "github.com"
    open_command = "xdg-open"
    commit_message = ":bookmark: v{version}"

Every key is optional. CLI options override file values, which override
the defaults below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = ".relflow.toml"

DEFAULT_MANIFEST = "package.json"
DEFAULT_BASE_BRANCH = "main"
DEFAULT_RELEASE_BRANCH = "develop"
DEFAULT_REMOTE = "origin"
DEFAULT_PACKAGE_MANAGER = "yarn"
DEFAULT_WEB_HOST = "github.com"
DEFAULT_COMMIT_MESSAGE = ":bookmark: v{version}"

# The commit message lands inside double quotes on a shell command line.
_SHELL_UNSAFE = frozenset("\"$`\\")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Config file could not be read or has invalid values."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Per-repository release settings.

    Attributes:
        manifest: Manifest path, relative to the repository root.
        base_branch: Branch releases are merged into and tagged from.
        default_branch: Branch offered when the branch prompt is left empty.
        remote: Git remote used to build the compare URL.
        package_manager: Executable whose ``add`` subcommand updates dependencies.
        web_host: Host of the web UI serving compare pages.
        open_command: Command that opens a URL; None means the platform default.
        commit_message: Release commit template; ``{version}`` is substituted.
    """

    manifest: str = DEFAULT_MANIFEST
    base_branch: str = DEFAULT_BASE_BRANCH
    default_branch: str = DEFAULT_RELEASE_BRANCH
    remote: str = DEFAULT_REMOTE
    package_manager: str = DEFAULT_PACKAGE_MANAGER
    web_host: str = DEFAULT_WEB_HOST
    open_command: str | None = None
    commit_message: str = DEFAULT_COMMIT_MESSAGE

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a config from a parsed TOML table, keeping defaults for gaps."""
        return cls(
            manifest=get_str(data, "manifest") or DEFAULT_MANIFEST,
            base_branch=get_str(data, "base_branch") or DEFAULT_BASE_BRANCH,
            default_branch=get_str(data, "default_branch") or DEFAULT_RELEASE_BRANCH,
            remote=get_str(data, "remote") or DEFAULT_REMOTE,
            package_manager=get_str(data, "package_manager") or DEFAULT_PACKAGE_MANAGER,
            web_host=get_str(data, "web_host") or DEFAULT_WEB_HOST,
            open_command=get_str(data, "open_command"),
            commit_message=get_str(data, "commit_message") or DEFAULT_COMMIT_MESSAGE,
        )

    def with_overrides(self, **overrides: str | None) -> ReleaseConfig:
        """Return a copy with every non-None override applied.

        Raises:
            TypeError: for a key that is not a config field.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"unknown config field(s): {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def format_commit_message(self, version: str) -> str:
        return self.commit_message.format(version=version)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load release settings from a TOML file.

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) if the file is
        missing or unreadable, or if the commit template does not
        format or holds characters the shell would interpret.
    """
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed

    config = ReleaseConfig.from_dict(parsed.value)
    try:
        config.format_commit_message("0.0.0")
    except (AttributeError, KeyError, IndexError, ValueError) as e:
        return Err(ConfigError(f"Invalid commit_message template: {e}", path=path))

    unsafe = sorted(_SHELL_UNSAFE.intersection(config.commit_message))
    if unsafe:
        return Err(
            ConfigError(
                f"Invalid commit_message template: must not contain {' '.join(unsafe)}",
                path=path,
            )
        )
    return Ok(config)


def load_config_or_default(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Like load_config, but a missing file yields the defaults."""
    if not path.exists():
        return Ok(ReleaseConfig())
    return load_config(path)
