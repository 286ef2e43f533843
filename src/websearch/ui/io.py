"""Abstract user interaction interface.

Defines the UserIO protocol so the dispatcher does not depend on a
particular prompt implementation. The CLI uses prompt_toolkit; tests use
scripted fakes.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class UserIO(Protocol):
    """Prompts the dispatcher needs.

    Both methods raise KeyboardInterrupt or EOFError when the user aborts.
    """

    def ask_text(self, prompt: str, default: str | None = None) -> str:
        """Ask for a single line of text, pre-filled with ``default``."""
        ...

    def ask_choice(
        self,
        prompt: str,
        choices: Sequence[str],
        require_match: bool = True,
    ) -> str:
        """Ask the user to pick one of ``choices``.

        With require_match, only an exact member of ``choices`` is accepted.
        """
        ...
