from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relflow.core.config import ReleaseConfig, load_config, load_config_or_default
from relflow.core.errors import ErrorCode
from relflow.core.result import Err
from relflow.core.workspace import Workspace, detect_workspace
from relflow.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    workspace: Workspace
    config: ReleaseConfig
    console: ConsoleProtocol


def build_context(
    *,
    config_path: Path | None = None,
    overrides: dict[str, str | None] | None = None,
) -> CLIContext:
    workspace_result = detect_workspace()
    if isinstance(workspace_result, Err):
        typer.echo(f"error: {workspace_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))
    workspace = workspace_result.value

    if config_path is not None:
        config_result = load_config(config_path.expanduser())
    else:
        config_result = load_config_or_default(workspace.config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    config = config_result.value.with_overrides(**(overrides or {}))
    return CLIContext(workspace=workspace, config=config, console=RichConsole())
