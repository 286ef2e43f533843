from __future__ import annotations

import logging
from typing import Any, Sequence

import pytest

from websearch.browser import BrowserLauncher
from websearch.dispatch import Dispatcher


class FakeIO:
    """Scripted UserIO: answers are consumed in order by either prompt kind.

    Running out of answers behaves like the user pressing Ctrl-D.
    """

    def __init__(self, answers: Sequence[Any] = ()):
        self.answers = list(answers)
        self.calls: list[tuple[str, str, Any]] = []

    def _next(self) -> str:
        if not self.answers:
            raise EOFError
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def ask_text(self, prompt: str, default: str | None = None) -> str:
        self.calls.append(("text", prompt, default))
        answer = self._next()
        return answer if answer != "" else (default or "")

    def ask_choice(self, prompt: str, choices: Sequence[str], require_match: bool = True) -> str:
        self.calls.append(("choice", prompt, list(choices)))
        return self._next()


class RecordingLauncher(BrowserLauncher):
    def __init__(self):
        self.urls: list[str] = []

    def launch(self, url: str) -> None:
        self.urls.append(url)


@pytest.fixture
def fake_io() -> FakeIO:
    return FakeIO()


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def dispatcher(fake_io: FakeIO, launcher: RecordingLauncher) -> Dispatcher:
    return Dispatcher.with_defaults(io=fake_io, launcher=launcher)


@pytest.fixture(autouse=True)
def _reset_websearch_logger():
    """setup_logging() attaches handlers to a process-wide logger."""
    yield
    logger = logging.getLogger("websearch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point HOME and cwd at a temp dir and clear websearch env vars."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for var in ("WEBSEARCH_BROWSER", "WEBSEARCH_LOG_LEVEL", "WEBSEARCH_NEW_WINDOW"):
        monkeypatch.delenv(var, raising=False)
    return home, work
