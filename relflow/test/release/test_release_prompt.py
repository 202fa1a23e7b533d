from __future__ import annotations

import pytest

import relflow.release.prompt as prompt_mod
from relflow.output.console import MockConsole, Style
from relflow.release.prompt import ScriptedPrompter, TerminalPrompter


def test_terminal_prompter_echoes_answer(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_prompt(text: str, **kwargs: object) -> str:
        seen["text"] = text
        seen.update(kwargs)
        return "y"

    monkeypatch.setattr(prompt_mod.typer, "prompt", fake_prompt)
    console = MockConsole()

    answer = TerminalPrompter(console).ask("Merged? (y/n): ")

    assert answer == "y"
    assert "Merged? (y/n): " in str(seen["text"])
    assert seen["default"] == ""
    assert seen["show_default"] is False
    assert seen["prompt_suffix"] == ""
    assert console.styled(Style.SUCCESS) == ["Your answer: y"]


def test_terminal_prompter_passes_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(prompt_mod.typer, "prompt", lambda text, **kw: kw["default"])
    console = MockConsole()

    assert TerminalPrompter(console).ask("Branch: ", default="develop") == "develop"
    assert console.messages == ["Your answer: develop"]


class TestScriptedPrompter:
    def test_replays_in_order(self) -> None:
        prompter = ScriptedPrompter.of("a", "b")
        assert prompter.ask("first") == "a"
        assert prompter.ask("second") == "b"
        assert prompter.queries == ["first", "second"]

    def test_empty_answer_uses_default(self) -> None:
        prompter = ScriptedPrompter.of("", "")
        assert prompter.ask("q", default="develop") == "develop"
        assert prompter.ask("q") == ""

    def test_exhausted_script_raises(self) -> None:
        with pytest.raises(LookupError, match="no scripted answer"):
            ScriptedPrompter.of().ask("anything?")
