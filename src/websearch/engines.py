"""Search engine definitions and the in-memory engine registry.

An engine is a title plus a URL template with a single ``%s`` placeholder,
optionally carrying a filter that rewrites the search text before it is
percent-encoded.
"""

from __future__ import annotations

import importlib
import logging
import re
import threading
from dataclasses import dataclass
from typing import Callable, Iterator

PLACEHOLDER = "%s"

TextFilter = Callable[[str], str]

logger = logging.getLogger("websearch.engines")


@dataclass(frozen=True)
class EngineDefinition:
    """A named web-search target."""

    id: str
    title: str
    url_template: str
    text_filter: TextFilter | None = None

    def apply_filter(self, text: str) -> str:
        if self.text_filter is None:
            return text
        return self.text_filter(text)


# ── Filters ──────────────────────────────────────────────────


def dashes_to_dots(text: str) -> str:
    """Rewrite runs of '-' as a single '.' (for IPs typed without dots)."""
    return re.sub(r"-+", ".", text)


FILTERS: dict[str, TextFilter] = {
    "dashes-to-dots": dashes_to_dots,
}


def resolve_filter(ref: str) -> TextFilter:
    """Resolve a filter by name or by "package.module:function" path."""
    if ref in FILTERS:
        return FILTERS[ref]
    if ":" not in ref:
        raise ValueError(
            f"Unknown filter '{ref}'. Available: {sorted(FILTERS)} "
            f"or a 'module:function' path"
        )
    module_path, func_name = ref.rsplit(":", 1)
    try:
        module = importlib.import_module(module_path)
        func = getattr(module, func_name)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Cannot load filter '{ref}': {e}") from e
    if not callable(func):
        raise ValueError(f"Filter '{ref}' is not callable")
    return func


# ── Defaults ─────────────────────────────────────────────────

DEFAULT_ENGINES: list[EngineDefinition] = [
    EngineDefinition("duckduckgo", "DuckDuckGo", "https://duckduckgo.com/?q=%s"),
    EngineDefinition("google", "Google", "http://www.google.com/search?q=%s"),
    EngineDefinition("yahoo", "Yahoo", "https://search.yahoo.com/search?p=%s"),
    EngineDefinition("github", "GitHub", "https://github.com/search?q=%s"),
    EngineDefinition("emacswiki", "EmacsWiki", "https://www.emacswiki.org/emacs?search=%s"),
    EngineDefinition("archwiki", "ArchWiki", "https://wiki.archlinux.org/index.php?search=%s"),
    EngineDefinition("debbugs", "GNU Bug Tracker", "https://debbugs.gnu.org/cgi/bugreport.cgi?bug=%s"),
    EngineDefinition(
        "wikipedia-en", "Wikipedia (en)",
        "https://en.wikipedia.org/wiki/Special:Search?search=%s",
    ),
    EngineDefinition(
        "wiktionary-en", "Wiktionary (en)",
        "https://en.wiktionary.org/wiki/Special:Search?search=%s",
    ),
    EngineDefinition("tfd", "The Free Dictionary", "https://www.thefreedictionary.com/%s"),
    EngineDefinition("ip", "IP Address Lookup", "https://ipinfo.io/%s", dashes_to_dots),
]


# ── Registry ─────────────────────────────────────────────────


class EngineRegistry:
    """Ordered collection of engines, unique by id.

    New engines go to the front. Adding an id that already exists replaces
    the old entry.
    """

    def __init__(self, engines: list[EngineDefinition] | None = None):
        self._engines: list[EngineDefinition] = []
        self._lock = threading.RLock()
        for engine in engines or []:
            self.add(engine)

    def add(self, engine: EngineDefinition) -> None:
        if engine.url_template.count(PLACEHOLDER) != 1:
            logger.warning(
                "engine_template_placeholder",
                extra={"data": {"engine": engine.id, "url_template": engine.url_template}},
            )
        with self._lock:
            self.delete(engine.id)
            self._engines.insert(0, engine)
        logger.debug("engine_added", extra={"data": {"engine": engine.id}})

    def delete(self, engine_id: str) -> None:
        with self._lock:
            before = len(self._engines)
            self._engines = [e for e in self._engines if e.id != engine_id]
            removed = before - len(self._engines)
        if removed:
            logger.debug("engine_deleted", extra={"data": {"engine": engine_id}})

    def get_by_id(self, engine_id: str) -> EngineDefinition | None:
        with self._lock:
            for engine in self._engines:
                if engine.id == engine_id:
                    return engine
        return None

    def get_by_title(self, title: str) -> EngineDefinition | None:
        with self._lock:
            for engine in self._engines:
                if engine.title == title:
                    return engine
        return None

    def titles(self) -> list[str]:
        """All titles, sorted ascending."""
        with self._lock:
            return sorted(e.title for e in self._engines)

    @property
    def engines(self) -> list[EngineDefinition]:
        with self._lock:
            return list(self._engines)

    def __iter__(self) -> Iterator[EngineDefinition]:
        return iter(self.engines)

    def __len__(self) -> int:
        return len(self._engines)

    def __contains__(self, engine_id: object) -> bool:
        return isinstance(engine_id, str) and self.get_by_id(engine_id) is not None
