"""Per-engine dispatch commands and the table that holds them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from websearch.exceptions import UnknownEngineError

if TYPE_CHECKING:
    from websearch.dispatch import Dispatcher


COMMAND_PREFIX = "search-"


def command_name(engine_id: str) -> str:
    return f"{COMMAND_PREFIX}{engine_id}"


class DispatchCommand:
    """Search with one engine, bound by id.

    Called without text, the command prompts for it. The prompt uses the
    engine's title as registered at call time, not when the command was made.
    """

    def __init__(self, dispatcher: Dispatcher, engine_id: str):
        self.engine_id = engine_id
        self.name = command_name(engine_id)
        self._dispatcher = dispatcher

    @property
    def description(self) -> str:
        engine = self._dispatcher.get_engine_by_id(self.engine_id)
        title = engine.title if engine else self.engine_id
        return f"Search {title}"

    def prompt_text(self) -> str:
        engine = self._dispatcher.get_engine_by_id(self.engine_id)
        if engine is None:
            raise UnknownEngineError(self.engine_id)
        return f"Search {engine.title}: "

    def __call__(self, text: str | None = None) -> None:
        if text is None:
            text = self._dispatcher.io.ask_text(self.prompt_text())
        self._dispatcher.search(text, self.engine_id)

    def __repr__(self) -> str:
        return f"DispatchCommand({self.name!r})"


class CommandTable:
    """Command name -> DispatchCommand."""

    def __init__(self):
        self._commands: dict[str, DispatchCommand] = {}

    def register(self, command: DispatchCommand):
        self._commands[command.name] = command

    def unregister(self, name: str):
        self._commands.pop(name, None)

    def get(self, name: str) -> DispatchCommand | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[DispatchCommand]:
        return iter(list(self._commands.values()))

    def __len__(self) -> int:
        return len(self._commands)
