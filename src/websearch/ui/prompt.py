"""Input prompts with prompt_toolkit: text entry and completing choices."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.formatted_text.html import html_escape
from prompt_toolkit.history import FileHistory
from prompt_toolkit.validation import Validator


def exact_match_validator(choices: Sequence[str]) -> Validator:
    """Validator accepting only an exact member of ``choices``."""
    allowed = set(choices)
    return Validator.from_callable(
        lambda text: text in allowed,
        error_message="Choose one of the listed entries (Tab to complete)",
        move_cursor_to_end=True,
    )


class Prompt:
    """Interactive prompts backed by a single PromptSession.

    Entered lines are kept in ``history_file`` when given. Choice prompts
    complete on the offered entries.
    """

    def __init__(
        self,
        history_file: Path | None = None,
        input: Any = None,
        output: Any = None,
    ):
        self._history = FileHistory(str(history_file)) if history_file else None
        self._input = input
        self._output = output
        self._session: PromptSession[str] | None = None

    @property
    def session(self) -> PromptSession[str]:
        # Created on first use so non-interactive runs never touch the terminal
        if self._session is None:
            self._session = PromptSession(
                history=self._history,
                auto_suggest=AutoSuggestFromHistory(),
                input=self._input,
                output=self._output,
            )
        return self._session

    @staticmethod
    def _message(prompt_text: str) -> HTML:
        return HTML(f"<style fg='#888888'>{html_escape(prompt_text)}</style>")

    def ask_text(self, prompt: str, default: str | None = None) -> str:
        return self.session.prompt(
            self._message(prompt),
            default=default or "",
        )

    def ask_choice(
        self,
        prompt: str,
        choices: Sequence[str],
        require_match: bool = True,
    ) -> str:
        completer = WordCompleter(list(choices), sentence=True, ignore_case=True)
        validator = exact_match_validator(choices) if require_match else None
        try:
            return self.session.prompt(
                self._message(prompt),
                default="",
                completer=completer,
                complete_while_typing=True,
                validator=validator,
                validate_while_typing=False,
            )
        finally:
            # prompt() keeps these on the session; text prompts must not inherit them
            self.session.completer = None
            self.session.validator = None
