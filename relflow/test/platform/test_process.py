"""Tests for relflow.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from relflow.core.result import Err, Ok
from relflow.platform.process import ProcessError, SubprocessRunner, run, run_shell

PY = sys.executable


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(
            command=("git", "status"),
            returncode=1,
            stdout="",
            stderr="fatal: not a git repository",
        )
        assert str(error) == "git status failed (exit 1)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("git", "commit", "-m", "msg", "-n"),
            returncode=1,
            stdout="",
            stderr="",
        )
        assert str(error) == "git commit -m ... failed (exit 1)"

    def test_details_prefers_stderr(self) -> None:
        assert ProcessError(("x",), 1, "out", " err \n").details == "err"
        assert ProcessError(("x",), 1, "out\n", "").details == "out"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "print('hello')"], cwd=tmp_path)
        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"], cwd=tmp_path)
        assert isinstance(result, Err)
        assert result.error.returncode == 3
        assert "bad" in result.error.stderr

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)
        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert result.error.stderr


class TestRunShell:
    def test_output_is_not_captured(self, tmp_path: Path, capfd: pytest.CaptureFixture[str]) -> None:
        result = run_shell(
            f"\"{PY}\" -c \"import sys; print('out'); sys.stderr.write('progress')\"",
            cwd=tmp_path,
        )

        assert result == Ok(None)
        captured = capfd.readouterr()
        assert "out" in captured.out
        assert "progress" in captured.err

    def test_stderr_is_written_before_later_stdout(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        script = "import sys, time; sys.stderr.write('first\\n'); sys.stderr.flush(); time.sleep(0.2); print('second')"
        result = run_shell(f"\"{PY}\" -c \"{script}\" 2>&1", cwd=tmp_path)

        assert result == Ok(None)
        out = capfd.readouterr().out
        assert out.index("first") < out.index("second")

    def test_failure_carries_exit_code(self, tmp_path: Path, capfd: pytest.CaptureFixture[str]) -> None:
        command = f"\"{PY}\" -c \"import sys; sys.stderr.write('tag exists'); sys.exit(128)\""
        result = run_shell(command, cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 128
        assert result.error.command == (command,)
        assert result.error.stderr == ""
        assert "tag exists" in capfd.readouterr().err

    def test_runs_in_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "marker.txt").write_text("x", encoding="utf-8")
        command = f"\"{PY}\" -c \"import os, sys; sys.exit(0 if os.path.exists('marker.txt') else 1)\""
        assert isinstance(run_shell(command, cwd=tmp_path), Ok)


def test_subprocess_runner_delegates(tmp_path: Path) -> None:
    runner = SubprocessRunner()
    assert isinstance(runner.capture([PY, "-c", "print(1)"], tmp_path), Ok)
    assert isinstance(runner.shell(f"\"{PY}\" -c \"raise SystemExit(2)\"", tmp_path), Err)
