"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

from collections.abc import Callable
import sys
from typing import Protocol, TypeVar

from rich.console import Console
from rich.markup import escape
from simple_term_menu import TerminalMenu

from slsinit.core.errors import SetupError, SetupErrorKind

T = TypeVar("T")

AnswerValidator = Callable[[str], None]
"""Raises ``SetupError(INVALID_ANSWER)`` for an unacceptable answer."""


class Prompts(Protocol):
    """Prompt engine consumed by setup steps."""

    def select(self, question: str, options: list[T], labels: list[str]) -> T: ...

    def text(
        self, question: str, default: str | None = None, validate: AnswerValidator | None = None
    ) -> str: ...


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


class TerminalPrompts:
    """Prompts rendered on the terminal. Invalid text answers are re-asked."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _print_bar(self) -> None:
        self.console.print("[dim]│[/]")

    def _print_answer(self, question: str, answer: str) -> None:
        self.console.print(f"[bold green]◇[/]  {question}")
        self.console.print(f"[dim]│[/]  [dim]{escape(answer)}[/]")
        self._print_bar()

    def select(self, question: str, options: list[T], labels: list[str]) -> T:
        """Ask *question* with an arrow-key menu of *labels*; return the matching option."""
        self.console.print(f"[bold cyan]◆[/]  {question}")

        choice = TerminalMenu(
            labels,
            menu_cursor="│  ❯ ",
            menu_cursor_style=("fg_cyan", "bold"),
            menu_highlight_style=("fg_cyan", "bold"),
            clear_menu_on_exit=True,
        ).show()
        if choice is None:
            raise SystemExit(1)

        _clear_lines(1)
        index = int(choice)
        self._print_answer(question, labels[index])
        return options[index]

    def text(
        self, question: str, default: str | None = None, validate: AnswerValidator | None = None
    ) -> str:
        """Display a clack-style text prompt, re-asking until *validate* accepts the answer."""
        self.console.print(f"[bold cyan]◆[/]  {question}")
        self._print_bar()

        suffix = f" ({default}) " if default else " "
        printed = 2
        while True:
            self.console.print("[dim]│[/]  ", end="")
            answer = input(suffix).strip() or (default or "")
            printed += 1
            if validate is None:
                break
            try:
                validate(answer)
            except SetupError as exc:
                if exc.kind is not SetupErrorKind.INVALID_ANSWER:
                    raise
                for line in exc.message.splitlines():
                    self.console.print(f"[dim]│[/]  [red]{escape(line)}[/]")
                    printed += 1
                continue
            break

        _clear_lines(printed)

        self._print_answer(question, answer)
        return answer
