"""Open web searches with named search engines."""

from websearch.commands import CommandTable, DispatchCommand
from websearch.dispatch import Dispatcher
from websearch.engines import DEFAULT_ENGINES, EngineDefinition, EngineRegistry
from websearch.exceptions import UnknownEngineError

__all__ = [
    "CommandTable",
    "DEFAULT_ENGINES",
    "DispatchCommand",
    "Dispatcher",
    "EngineDefinition",
    "EngineRegistry",
    "UnknownEngineError",
]
