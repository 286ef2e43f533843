"""Browser launcher abstraction.

Launching goes through an ABC so tests and ``--print`` mode can run
without opening browser windows.
"""

from __future__ import annotations

import webbrowser
from abc import ABC, abstractmethod
from typing import Callable


class BrowserLauncher(ABC):
    """Abstract interface for launching URLs in a browser."""

    @abstractmethod
    def launch(self, url: str) -> None:
        """Open a URL.

        Args:
            url: The fully built search URL
        """
        ...


class WebBrowserLauncher(BrowserLauncher):
    """Opens URLs with the stdlib ``webbrowser`` controllers.

    ``browser`` is a name understood by ``webbrowser.get`` (e.g. "firefox");
    None uses the platform default, which honours $BROWSER.
    """

    def __init__(self, browser: str | None = None, new_window: bool = False):
        self.browser = browser
        self.new_window = new_window

    def launch(self, url: str) -> None:
        controller = webbrowser.get(self.browser)
        if not controller.open(url, new=1 if self.new_window else 2):
            raise webbrowser.Error(f"Could not open browser for {url}")


class PrintLauncher(BrowserLauncher):
    """Hands the URL to a print function instead of a browser."""

    def __init__(self, emit: Callable[[str], None] = print):
        self._emit = emit

    def launch(self, url: str) -> None:
        self._emit(url)
