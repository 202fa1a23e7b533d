from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from relflow.cli.context import CLIContext, build_context
from relflow.core.errors import ErrorCode
from relflow.core.result import Err
from relflow.git.repository import Repository, compare_url
from relflow.output.errors import print_release_error, release_error_exit_code
from relflow.platform.process import SubprocessRunner
from relflow.release.errors import ReleaseError
from relflow.release.flow import ReleaseContext, preview_next_version, run_release
from relflow.release.prompt import TerminalPrompter


def _fail(ctx: CLIContext, error: ReleaseError) -> NoReturn:
    print_release_error(error, ctx.console)
    raise typer.Exit(code=release_error_exit_code(error))


def release(
    manifest: str | None = typer.Option(None, "--manifest", help="Manifest holding the version."),
    base_branch: str | None = typer.Option(None, "--base-branch", help="Branch to merge into and tag."),
    default_branch: str | None = typer.Option(
        None, "--default-branch", help="Branch used when the branch prompt is left empty."
    ),
    package_manager: str | None = typer.Option(
        None, "--package-manager", help="Executable used for '<pm> add <specs>'."
    ),
    remote: str | None = typer.Option(None, "--remote", help="Git remote for URLs and tag push."),
    no_open: bool = typer.Option(False, "--no-open", help="Print the compare URL instead of opening it."),
    config: Path | None = typer.Option(None, "--config", help="Config file (default: .relflow.toml)."),
) -> None:
    """Bump the version, push, and tag a release interactively."""
    ctx = build_context(
        config_path=config,
        overrides={
            "manifest": manifest,
            "base_branch": base_branch,
            "default_branch": default_branch,
            "package_manager": package_manager,
            "remote": remote,
        },
    )
    release_ctx = ReleaseContext(
        workspace=ctx.workspace,
        config=ctx.config,
        console=ctx.console,
        runner=SubprocessRunner(),
        prompter=TerminalPrompter(ctx.console),
        open_browser=not no_open,
    )

    try:
        result = run_release(release_ctx)
    except Exception as e:  # noqa: BLE001
        ctx.console.error(str(e) or type(e).__name__)
        ctx.console.error("Release failed!")
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        ctx.console.error("Release failed!")
        raise typer.Exit(code=release_error_exit_code(result.error))

    if result.value == "completed":
        ctx.console.success("All done!")


def next_version(
    manifest: str | None = typer.Option(None, "--manifest", help="Manifest holding the version."),
    config: Path | None = typer.Option(None, "--config", help="Config file (default: .relflow.toml)."),
) -> None:
    """Show the current and next version without changing anything."""
    ctx = build_context(config_path=config, overrides={"manifest": manifest})
    preview = preview_next_version(ctx.workspace.manifest_path(ctx.config.manifest))
    if isinstance(preview, Err):
        _fail(ctx, preview.error)

    current, upcoming = preview.value
    ctx.console.print(f"Current version: {current}")
    ctx.console.success(f"Next version: {upcoming}")


def compare(
    base_branch: str | None = typer.Option(None, "--base-branch", help="Base of the comparison."),
    remote: str | None = typer.Option(None, "--remote", help="Git remote to derive the URL from."),
    config: Path | None = typer.Option(None, "--config", help="Config file (default: .relflow.toml)."),
) -> None:
    """Print the compare URL between the base branch and the current branch."""
    ctx = build_context(
        config_path=config,
        overrides={"base_branch": base_branch, "remote": remote},
    )
    repo = Repository(ctx.workspace.root)
    info = repo.info(remote=ctx.config.remote, host=ctx.config.web_host)
    if isinstance(info, Err):
        _fail(
            ctx,
            ReleaseError(
                kind="repo_info_failed",
                message=f"Error fetching repository info: {info.error.message}",
            ),
        )
    ctx.console.print(compare_url(info.value, base=ctx.config.base_branch))
