"""Blocking one-line prompts.

``TerminalPrompter`` reads from the controlling terminal through typer.
``ScriptedPrompter`` replays canned answers for tests. Answers are
returned raw; call sites decide how to interpret them.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Protocol

import typer

from relflow.output.console import ConsoleProtocol

__all__ = ["Prompter", "ScriptedPrompter", "TerminalPrompter"]


class Prompter(Protocol):
    def ask(self, query: str, *, default: str | None = None) -> str:
        """Block until one line is read; an empty line yields ``default`` (or "")."""
        ...


class TerminalPrompter:
    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def ask(self, query: str, *, default: str | None = None) -> str:
        answer: str = typer.prompt(
            typer.style(query, fg=typer.colors.GREEN),
            default="" if default is None else default,
            show_default=False,
            prompt_suffix="",
        )
        self._console.success(f"Your answer: {answer}")
        return answer


def _empty_queries() -> list[str]:
    return []


@dataclass
class ScriptedPrompter:
    """Prompter that answers from a fixed script.

    Raises:
        LookupError: from ``ask`` when the script has run out.
    """

    answers: deque[str]
    queries: list[str] = field(default_factory=_empty_queries)

    @classmethod
    def of(cls, *answers: str) -> ScriptedPrompter:
        return cls(answers=deque(answers))

    def ask(self, query: str, *, default: str | None = None) -> str:
        self.queries.append(query)
        if not self.answers:
            raise LookupError(f"no scripted answer for prompt: {query!r}")
        answer = self.answers.popleft()
        if not answer and default is not None:
            return default
        return answer
