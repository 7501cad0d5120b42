"""Interactive prompt collaborator.

All questions the configurator asks go through a ``Prompter`` so tests (and
non-interactive callers) can substitute scripted answers.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

from configure_package.utils import console as default_console


def is_answer_yes(answer: str) -> bool:
    return answer.lower().strip().startswith("y")


def is_answer_no(answer: str) -> bool:
    return answer.lower().strip().startswith("n")


class Prompter:
    """Reads answers from the terminal through a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def _read(self, text: str) -> str:
        return self.console.input(text)

    def ask(self, prompt: str, default: str = "") -> str:
        """Ask a question, returning *default* for a blank answer or EOF."""
        suffix = f"({escape(default)}) " if default else ""
        try:
            result = self._read(f"» {prompt} {suffix}")
        except EOFError:
            result = ""

        if not result or not result.strip():
            return default
        return result

    def ask_boolean(self, prompt: str, default: bool = True) -> bool:
        """Ask a yes/no question; anything not starting with ``y`` is a no."""
        suffix = "[Y/n]" if default else "[y/N]"
        answer = self.ask(f"{prompt} {escape(suffix)}").strip()
        if not answer:
            return default
        return is_answer_yes(answer)

    def conditional_ask(
        self,
        obj: Any,
        attr: str,
        prompt: str,
        *,
        allow_empty: bool = False,
    ) -> str:
        """Ask for ``obj.attr`` using its current value as the default.

        Required values are asked again until a non-empty answer is given.
        The answer is stored back on *obj* and returned.
        """
        current = getattr(obj, attr) or ""
        while True:
            value = self.ask(prompt, current)
            setattr(obj, attr, value)
            if value or allow_empty:
                return value
