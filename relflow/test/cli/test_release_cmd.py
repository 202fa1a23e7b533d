from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer

import relflow.cli.commands.release_cmd as release_cmd
from relflow.cli.context import CLIContext
from relflow.core.config import ReleaseConfig
from relflow.core.errors import ErrorCode
from relflow.core.workspace import Workspace
from relflow.git.repository import Repository
from relflow.output.console import MockConsole
from relflow.release.prompt import ScriptedPrompter
from relflow.test._fakes import RecordingRunner


def _ctx(tmp_path: Path, version: str = "1.2.9") -> CLIContext:
    (tmp_path / "package.json").write_text(json.dumps({"version": version}), encoding="utf-8")
    return CLIContext(
        workspace=Workspace(root=tmp_path),
        config=ReleaseConfig(open_command="open"),
        console=MockConsole(),
    )


def _patch(
    monkeypatch: pytest.MonkeyPatch,
    ctx: CLIContext,
    *answers: str,
    runner: RecordingRunner | None = None,
) -> RecordingRunner:
    runner = runner or RecordingRunner.for_repo()
    monkeypatch.setattr(release_cmd, "build_context", lambda **_: ctx)
    monkeypatch.setattr(release_cmd, "SubprocessRunner", lambda: runner)
    monkeypatch.setattr(release_cmd, "TerminalPrompter", lambda console: ScriptedPrompter.of(*answers))
    return runner


def _release() -> None:
    release_cmd.release(
        manifest=None,
        base_branch=None,
        default_branch=None,
        package_manager=None,
        remote=None,
        no_open=False,
        config=None,
    )


def _messages(ctx: CLIContext) -> list[str]:
    assert isinstance(ctx.console, MockConsole)
    return ctx.console.messages


def test_completed_release_says_all_done(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    runner = _patch(monkeypatch, ctx, "", "", "y", "a")

    _release()

    assert _messages(ctx)[-1] == "All done!"
    assert runner.shell_calls[-1] == "git push origin v1.3.0"


def test_declined_merge_returns_normally(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    _patch(monkeypatch, ctx, "", "", "n")

    _release()

    assert "All done!" not in _messages(ctx)
    assert _messages(ctx)[-1] == "Merge canceled."


def test_manual_tag_returns_normally(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    _patch(monkeypatch, ctx, "", "", "y", "m")

    _release()

    assert "==== 2. git push origin v1.3.0   ====" in _messages(ctx)
    assert "All done!" not in _messages(ctx)


def test_command_failure_exits_1(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    runner = RecordingRunner.for_repo()
    runner.failures["git fetch"] = 128
    _patch(monkeypatch, ctx, "", "", "y", "a", runner=runner)

    with pytest.raises(typer.Exit) as exc:
        _release()

    assert exc.value.exit_code == int(ErrorCode.FAILURE)
    assert runner.shell_calls == ["git fetch"]
    assert _messages(ctx)[-1] == "Release failed!"


def test_repo_info_failure_exits_1(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    _patch(monkeypatch, ctx, runner=RecordingRunner())

    with pytest.raises(typer.Exit) as exc:
        _release()

    assert exc.value.exit_code == 1
    assert any("Error fetching repository info" in m for m in _messages(ctx))


def test_unexpected_exception_exits_1(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    _patch(monkeypatch, ctx, "")  # script runs out at the dependency prompt

    with pytest.raises(typer.Exit) as exc:
        _release()

    assert exc.value.exit_code == 1
    assert _messages(ctx)[-1] == "Release failed!"


def test_release_passes_overrides_to_context(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}
    ctx = _ctx(tmp_path)

    def fake_build_context(**kwargs: object) -> CLIContext:
        seen.update(kwargs)
        return ctx

    _patch(monkeypatch, ctx, "", "", "n")
    monkeypatch.setattr(release_cmd, "build_context", fake_build_context)

    release_cmd.release(
        manifest="web/package.json",
        base_branch="master",
        default_branch=None,
        package_manager="npm",
        remote=None,
        no_open=True,
        config=tmp_path / "custom.toml",
    )

    assert seen["config_path"] == tmp_path / "custom.toml"
    assert seen["overrides"] == {
        "manifest": "web/package.json",
        "base_branch": "master",
        "default_branch": None,
        "package_manager": "npm",
        "remote": None,
    }


def test_next_version_prints_preview(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path, version="1.9.9")
    monkeypatch.setattr(release_cmd, "build_context", lambda **_: ctx)

    release_cmd.next_version(manifest=None, config=None)

    assert _messages(ctx) == ["Current version: 1.9.9", "Next version: 2.0.0"]
    assert json.loads((tmp_path / "package.json").read_text(encoding="utf-8")) == {"version": "1.9.9"}


def test_next_version_rejects_bad_manifest(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path, version="one")
    monkeypatch.setattr(release_cmd, "build_context", lambda **_: ctx)

    with pytest.raises(typer.Exit) as exc:
        release_cmd.next_version(manifest=None, config=None)

    assert exc.value.exit_code == 1
    assert "invalid version: 'one'" in _messages(ctx)


def test_compare_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    monkeypatch.setattr(release_cmd, "build_context", lambda **_: ctx)
    monkeypatch.setattr(
        release_cmd,
        "Repository",
        lambda root: Repository(root, runner=RecordingRunner.for_repo(branch="feature/a")),
    )

    release_cmd.compare(base_branch=None, remote=None, config=None)

    assert _messages(ctx) == ["https://github.com/owner/repo/compare/main...feature/a"]


def test_compare_url_fails_outside_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    monkeypatch.setattr(release_cmd, "build_context", lambda **_: ctx)
    monkeypatch.setattr(release_cmd, "Repository", lambda root: Repository(root, runner=RecordingRunner()))

    with pytest.raises(typer.Exit) as exc:
        release_cmd.compare(base_branch=None, remote=None, config=None)

    assert exc.value.exit_code == 1
