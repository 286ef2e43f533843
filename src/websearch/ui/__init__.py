"""UI package - console rendering and input."""

from websearch.ui.console import Console
from websearch.ui.io import UserIO
from websearch.ui.prompt import Prompt

__all__ = ["Console", "Prompt", "UserIO"]
