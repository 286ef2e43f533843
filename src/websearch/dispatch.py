"""Dispatcher - turns search text and an engine into an opened URL.

Owns the engine registry and the per-engine command table, and reaches the
outside world only through a UserIO (prompts) and a BrowserLauncher.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from websearch.browser import BrowserLauncher, WebBrowserLauncher
from websearch.commands import CommandTable, DispatchCommand, command_name
from websearch.engines import (
    DEFAULT_ENGINES,
    PLACEHOLDER,
    EngineDefinition,
    EngineRegistry,
    TextFilter,
)
from websearch.exceptions import UnknownEngineError
from websearch.log import log_search
from websearch.ui.io import UserIO

if TYPE_CHECKING:
    from websearch.config import Config

logger = logging.getLogger("websearch.dispatch")

TEXT_PROMPT = "Search for: "
ENGINE_PROMPT = "Engine: "


def percent_encode(text: str) -> str:
    """Percent-encode everything but unreserved characters (space -> %20).

    Undecodable command-line bytes (surrogate-escaped by Python) are
    encoded back to the original bytes.
    """
    return quote(text, safe="", errors="surrogateescape")


class Dispatcher:
    """Engine registry plus search dispatch."""

    def __init__(
        self,
        registry: EngineRegistry | None = None,
        *,
        io: UserIO | None = None,
        launcher: BrowserLauncher | None = None,
    ):
        self.registry = registry if registry is not None else EngineRegistry()
        self.commands = CommandTable()
        self.launcher = launcher if launcher is not None else WebBrowserLauncher()
        self._io = io
        for engine in self.registry:
            self.commands.register(self.generate_dispatch_operation(engine.id))

    @classmethod
    def with_defaults(cls, **kwargs) -> Dispatcher:
        dispatcher = cls(**kwargs)
        for engine in DEFAULT_ENGINES:
            dispatcher.add(engine)
        return dispatcher

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> Dispatcher:
        """Defaults, then the user's engines, then the user's removals."""
        dispatcher = cls.with_defaults(**kwargs)
        for engine in config.engine_definitions():
            dispatcher.add(engine)
        for engine_id in config.disabled:
            dispatcher.delete_engine(engine_id)
        return dispatcher

    @property
    def io(self) -> UserIO:
        if self._io is None:
            from websearch.ui.prompt import Prompt

            self._io = Prompt()
        return self._io

    # ── Registry ─────────────────────────────────────────────

    def add_engine(
        self,
        engine_id: str,
        title: str,
        url_template: str,
        text_filter: TextFilter | None = None,
    ) -> None:
        """Add or replace an engine and (re)generate its search command."""
        self.add(EngineDefinition(engine_id, title, url_template, text_filter))

    def add(self, engine: EngineDefinition) -> None:
        self.registry.add(engine)
        self.commands.register(self.generate_dispatch_operation(engine.id))

    def delete_engine(self, engine_id: str) -> None:
        self.registry.delete(engine_id)
        self.commands.unregister(command_name(engine_id))

    def get_engine_by_id(self, engine_id: str) -> EngineDefinition | None:
        return self.registry.get_by_id(engine_id)

    def get_engine_by_title(self, title: str) -> EngineDefinition | None:
        return self.registry.get_by_title(title)

    def generate_dispatch_operation(self, engine_id: str) -> DispatchCommand:
        return DispatchCommand(self, engine_id)

    # ── Searching ────────────────────────────────────────────

    def build_url(self, text: str, engine_id: str) -> str:
        """Filter, encode, and substitute ``text`` into the engine's template.

        Raises UnknownEngineError if ``engine_id`` is not registered.
        """
        return self._resolve(text, engine_id)[1]

    def _resolve(self, text: str, engine_id: str) -> tuple[EngineDefinition, str]:
        engine = self.get_engine_by_id(engine_id)
        if engine is None:
            raise UnknownEngineError(engine_id)
        encoded = percent_encode(engine.apply_filter(text))
        return engine, engine.url_template.replace(PLACEHOLDER, encoded, 1)

    def search(self, text: str, engine_id: str) -> None:
        engine, url = self._resolve(text, engine_id)
        log_search(engine_id, url, filtered=engine.text_filter is not None)
        self.launcher.launch(url)

    def choose_engine(self) -> str:
        """Ask for an engine by title; returns its id."""
        title = self.io.ask_choice(ENGINE_PROMPT, self.registry.titles(), require_match=True)
        engine = self.get_engine_by_title(title)
        if engine is None:
            # Only reachable if the prompt let a non-matching title through
            raise UnknownEngineError(title)
        return engine.id

    def interactive_search(self, selection: str | None = None) -> None:
        """Prompt for text (defaulting to ``selection``) and an engine, then search.

        A prompt abort (KeyboardInterrupt / EOFError) propagates and nothing
        is opened.
        """
        text = self.io.ask_text(TEXT_PROMPT, default=selection)
        engine_id = self.choose_engine()
        self.search(text, engine_id)
