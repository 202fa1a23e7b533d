"""The interactive release procedure.

Steps, in order, never going back:

1. select_branch        prompt for a branch, fetch, check it out, pull --rebase
2. update_dependencies  optionally ``<pm> add <specs>``
3. bump_version         rewrite the manifest version, commit, push
4. open_compare         open the base...branch compare page
5. confirm_merge        on "y" check out the base branch and pull
6. tag_release          "a": tag and push the tag, else print manual steps

A failed command ends the run with an error. Declining at step 5 or
choosing manual tagging at step 6 ends it normally. Rerunning starts over
and bumps the version again.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from relflow.core.config import ReleaseConfig
from relflow.core.result import Err, Ok, Result
from relflow.core.workspace import Workspace
from relflow.git.repository import Repository, compare_url
from relflow.output.console import ConsoleProtocol
from relflow.platform.detection import default_open_command
from relflow.platform.process import CommandRunner
from relflow.release import commands
from relflow.release.errors import ReleaseError
from relflow.release.executor import CommandExecutor
from relflow.release.machine import StepOutcome, StepHandler, advance, finish, run_state_machine
from relflow.release.manifest import read_manifest_version, write_manifest_version
from relflow.release.model import ReleaseOutcome, ReleaseSession
from relflow.release.prompt import Prompter
from relflow.release.version import Version, next_version, parse_version

__all__ = [
    "ReleaseContext",
    "ReleaseFlow",
    "manual_tag_banner",
    "preview_next_version",
    "run_release",
]

StepResult = Result[StepOutcome[ReleaseSession], ReleaseError]


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Everything a release run touches, passed in explicitly."""

    workspace: Workspace
    config: ReleaseConfig
    console: ConsoleProtocol
    runner: CommandRunner
    prompter: Prompter
    open_browser: bool = True

    @property
    def manifest_path(self) -> Path:
        return self.workspace.manifest_path(self.config.manifest)

    @property
    def open_command(self) -> str:
        return self.config.open_command or default_open_command()


def manual_tag_banner(version: Version, *, remote: str = "origin") -> list[str]:
    tag = version.to_tag()
    return [
        "=============================================",
        "==== Please push tag manually to deploy: ====",
        f"==== 1. git tag {tag}           ====",
        f"==== 2. git push {remote} {tag}   ====",
        "=============================================",
    ]


def _is_yes(answer: str, letter: str) -> bool:
    return answer.strip().lower() == letter


class ReleaseFlow:
    def __init__(self, ctx: ReleaseContext) -> None:
        self._ctx = ctx
        self._console = ctx.console
        self._config = ctx.config
        self._executor = CommandExecutor(
            runner=ctx.runner,
            console=ctx.console,
            cwd=ctx.workspace.root,
        )
        self._repo = Repository(ctx.workspace.root, runner=ctx.runner)

    def handlers(self) -> dict[str, StepHandler[ReleaseSession]]:
        return {
            "select_branch": self.select_branch,
            "update_dependencies": self.update_dependencies,
            "bump_version": self.bump_version,
            "open_compare": self.open_compare,
            "confirm_merge": self.confirm_merge,
            "tag_release": self.tag_release,
        }

    def run(self, session: ReleaseSession | None = None) -> Result[ReleaseOutcome, ReleaseError]:
        preflight = self.check_remote()
        if isinstance(preflight, Err):
            return preflight

        return run_state_machine(
            initial_state=session or ReleaseSession(),
            get_step=lambda s: s.step,
            handlers=self.handlers(),
        )

    def check_remote(self) -> Result[str, ReleaseError]:
        """Fail before touching anything when the remote cannot be resolved."""
        url = self._repo.remote_url(self._config.remote)
        if isinstance(url, Err):
            return Err(
                ReleaseError(
                    kind="repo_info_failed",
                    message=f"Error fetching repository info: {url.error.message}",
                )
            )
        return Ok(url.value)

    # Steps

    def select_branch(self, session: ReleaseSession) -> StepResult:
        default = self._config.default_branch
        branch = self._ctx.prompter.ask(
            f'Checkout branch want to release, default is "{default}": ',
            default=default,
        ).strip() or default

        done = self._executor.execute_all(
            commands.GIT_FETCH,
            commands.git_checkout(branch),
            commands.GIT_PULL_REBASE,
        )
        if isinstance(done, Err):
            return done
        return Ok(advance(replace(session, step="update_dependencies", branch=branch)))

    def update_dependencies(self, session: ReleaseSession) -> StepResult:
        specs = self._ctx.prompter.ask(
            "Do you need to update dependencies?, (ex: some-package@1.4.0 uuid ...). "
            "Leave blank if not: "
        )
        if specs.strip():
            done = self._executor.execute(commands.package_add(self._config.package_manager, specs))
            if isinstance(done, Err):
                return done
        return Ok(advance(replace(session, step="bump_version")))

    def bump_version(self, session: ReleaseSession) -> StepResult:
        path = self._ctx.manifest_path
        current_text = read_manifest_version(path)
        if isinstance(current_text, Err):
            return current_text
        current = parse_version(current_text.value)
        if isinstance(current, Err):
            return current
        new = current.value.next()

        self._console.success(f"Current version: {current.value}")
        self._console.success(f"New version: {new}")
        self._console.newline()

        written = write_manifest_version(path, str(new))
        if isinstance(written, Err):
            return written

        done = self._executor.execute_all(
            commands.GIT_ADD_ALL,
            commands.git_commit(self._config.format_commit_message(str(new))),
            commands.GIT_PUSH,
        )
        if isinstance(done, Err):
            return done
        return Ok(
            advance(
                replace(
                    session,
                    step="open_compare",
                    current_version=current.value,
                    new_version=new,
                )
            )
        )

    def open_compare(self, session: ReleaseSession) -> StepResult:
        info = self._repo.info(remote=self._config.remote, host=self._config.web_host)
        if isinstance(info, Err):
            return Err(
                ReleaseError(
                    kind="repo_info_failed",
                    message=f"Error fetching repository info: {info.error.message}",
                )
            )

        url = compare_url(info.value, base=self._config.base_branch)
        self._console.newline()
        if self._ctx.open_browser:
            self._console.success("Opening GitHub PR for merge...")
            done = self._executor.execute(commands.open_url(self._ctx.open_command, url))
            if isinstance(done, Err):
                return done
        else:
            self._console.success(f"Compare: {url}")
        return Ok(advance(replace(session, step="confirm_merge", branch=info.value.branch)))

    def confirm_merge(self, session: ReleaseSession) -> StepResult:
        base = self._config.base_branch
        branch = session.branch or self._config.default_branch
        answer = self._ctx.prompter.ask(
            f"\nHave you actually merged the {branch} branch into {base}? (y/n): "
        )
        if not _is_yes(answer, "y"):
            self._console.error("Merge canceled.")
            return Ok(finish("merge_cancelled"))

        done = self._executor.execute_all(commands.git_checkout(base), commands.GIT_PULL_REBASE)
        if isinstance(done, Err):
            return done
        return Ok(advance(replace(session, step="tag_release")))

    def tag_release(self, session: ReleaseSession) -> StepResult:
        version = session.new_version
        if version is None:
            return Err(ReleaseError(kind="invalid_input", message="no version to tag"))

        answer = self._ctx.prompter.ask(
            "\nDo you want to push the tag deploy automatically or manually? (a/m): "
        )
        if not _is_yes(answer, "a"):
            for line in manual_tag_banner(version, remote=self._config.remote):
                self._console.success(line)
            self._console.newline()
            return Ok(finish("manual_tag"))

        tag = version.to_tag()
        done = self._executor.execute_all(
            commands.git_tag(tag),
            commands.git_push_tag(self._config.remote, tag),
        )
        if isinstance(done, Err):
            return done
        return Ok(finish("completed"))


def run_release(ctx: ReleaseContext) -> Result[ReleaseOutcome, ReleaseError]:
    return ReleaseFlow(ctx).run()


def preview_next_version(path: Path) -> Result[tuple[Version, Version], ReleaseError]:
    """Current and next manifest version, without writing anything."""
    current = read_manifest_version(path)
    if isinstance(current, Err):
        return current
    parsed = parse_version(current.value)
    if isinstance(parsed, Err):
        return parsed
    upcoming = next_version(current.value)
    if isinstance(upcoming, Err):
        return upcoming
    return Ok((parsed.value, upcoming.value))
