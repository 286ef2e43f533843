from __future__ import annotations

import io
import webbrowser

import pytest
from rich.console import Console as RichConsole

from websearch.__main__ import build_parser, main
from websearch.app import App
from websearch.browser import PrintLauncher, WebBrowserLauncher
from websearch.config import Config
from websearch.dispatch import Dispatcher
from websearch.ui.console import Console
from websearch.ui.prompt import Prompt

from conftest import FakeIO, RecordingLauncher


@pytest.fixture
def wide(monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")


# ===================================================================
# Command line
# ===================================================================

class TestMain:
    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.text == []
        assert args.engine is None
        assert not args.list and not args.shell and not args.print_only

    def test_print_url(self, isolated_env, wide, capsys):
        assert main(["-p", "-e", "google", "hello", "world"]) == 0
        out = capsys.readouterr().out
        assert "http://www.google.com/search?q=hello%20world" in out

    def test_list(self, isolated_env, wide, capsys):
        assert main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "wikipedia-en" in out
        assert "dashes-to-dots" in out

    def test_unknown_engine(self, isolated_env, wide, capsys):
        assert main(["-p", "-e", "altavista", "x"]) == 1
        assert "Unknown search engine: 'altavista'" in capsys.readouterr().out

    def test_unknown_engine_without_text(self, isolated_env, wide, capsys):
        assert main(["-p", "-e", "altavista"]) == 1
        assert "altavista" in capsys.readouterr().out

    def test_undecodable_argument_bytes(self, isolated_env, wide, capsys):
        assert main(["-p", "-e", "google", "caf\udcff"]) == 0
        assert "http://www.google.com/search?q=caf%FF" in capsys.readouterr().out

    def test_unencodable_text_exits_1(self, isolated_env, wide, capsys):
        assert main(["-p", "-e", "google", "\ud800"]) == 1
        assert "Cannot encode search text" in capsys.readouterr().out

    def test_engine_without_text_prompts(self, isolated_env, wide, capsys, monkeypatch):
        prompts = []

        def ask_text(self, prompt, default=None):
            prompts.append(prompt)
            return "1-1-1-1"

        monkeypatch.setattr(Prompt, "ask_text", ask_text)
        assert main(["-p", "-e", "ip"]) == 0
        assert prompts == ["Search IP Address Lookup: "]
        assert "https://ipinfo.io/1.1.1.1" in capsys.readouterr().out

    def test_interactive_uses_text_as_selection(self, isolated_env, wide, capsys, monkeypatch):
        seen = {}

        def ask_text(self, prompt, default=None):
            seen["default"] = default
            return default

        monkeypatch.setattr(Prompt, "ask_text", ask_text)
        monkeypatch.setattr(Prompt, "ask_choice", lambda self, p, c, require_match=True: "DuckDuckGo")
        assert main(["-p", "rust", "traits"]) == 0
        assert seen["default"] == "rust traits"
        assert "https://duckduckgo.com/?q=rust%20traits" in capsys.readouterr().out

    def test_abort_exits_130(self, isolated_env, wide, capsys, monkeypatch):
        def ask_text(self, prompt, default=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(Prompt, "ask_text", ask_text)
        assert main(["-p"]) == 130
        assert "Aborted." in capsys.readouterr().out

    def test_invalid_config(self, isolated_env, wide, capsys):
        home, _ = isolated_env
        cfg_dir = home / ".websearch"
        cfg_dir.mkdir()
        (cfg_dir / "config.toml").write_text('[engines.x]\nurl = "https://x/%s"\nfilter = "nope"\n')
        assert main(["--list"]) == 1
        assert "Invalid configuration" in capsys.readouterr().out

    def test_browser_error_exits_1(self, isolated_env, wide, capsys, monkeypatch):
        def launch(self, url):
            raise webbrowser.Error("could not locate runnable browser")

        monkeypatch.setattr(WebBrowserLauncher, "launch", launch)
        assert main(["-e", "google", "x"]) == 1
        assert "could not locate runnable browser" in capsys.readouterr().out

    def test_logs_written(self, isolated_env, wide):
        home, _ = isolated_env
        assert main(["-p", "-e", "google", "x"]) == 0
        log_file = home / ".websearch" / "logs" / "websearch.jsonl"
        assert '"engine": "google"' in log_file.read_text()


class TestLaunchers:
    def test_print_launcher(self):
        seen = []
        PrintLauncher(seen.append).launch("https://example.org/")
        assert seen == ["https://example.org/"]

    def test_webbrowser_launcher_opens_tab(self, monkeypatch):
        opened = []

        class Controller:
            def open(self, url, new=0):
                opened.append((url, new))
                return True

        monkeypatch.setattr(webbrowser, "get", lambda name=None: Controller())
        WebBrowserLauncher().launch("https://a/")
        WebBrowserLauncher(new_window=True).launch("https://b/")
        assert opened == [("https://a/", 2), ("https://b/", 1)]

    def test_webbrowser_launcher_failure(self, monkeypatch):
        class Controller:
            def open(self, url, new=0):
                return False

        monkeypatch.setattr(webbrowser, "get", lambda name=None: Controller())
        with pytest.raises(webbrowser.Error):
            WebBrowserLauncher("nothing").launch("https://a/")


# ===================================================================
# Interactive shell
# ===================================================================

def _make_app(answers, tmp_path):
    fake_io = FakeIO(answers)
    launcher = RecordingLauncher()
    dispatcher = Dispatcher.with_defaults(io=fake_io, launcher=launcher)
    buf = io.StringIO()
    console = Console(RichConsole(file=buf, width=200))
    app = App(dispatcher, Config(data_dir=tmp_path), console)
    return app, launcher, buf, fake_io


class TestShell:
    def test_plain_text_picks_engine(self, tmp_path):
        app, launcher, buf, _ = _make_app(["hello world", "Google", "/quit"], tmp_path)
        app.run()
        assert launcher.urls == ["http://www.google.com/search?q=hello%20world"]
        assert "Goodbye." in buf.getvalue()

    def test_engine_command(self, tmp_path):
        app, launcher, _, _ = _make_app(["/search-wiktionary-en bonjour"], tmp_path)
        app.run()
        assert launcher.urls == ["https://en.wiktionary.org/wiki/Special:Search?search=bonjour"]

    def test_engine_command_prompts(self, tmp_path):
        app, launcher, _, fake_io = _make_app(["/search-debbugs", "12345"], tmp_path)
        app.run()
        assert fake_io.calls[1] == ("text", "Search GNU Bug Tracker: ", None)
        assert launcher.urls == ["https://debbugs.gnu.org/cgi/bugreport.cgi?bug=12345"]

    def test_add_then_search_and_delete(self, tmp_path):
        app, launcher, buf, _ = _make_app(
            [
                "/add pypi https://pypi.org/search/?q=%s Python Package Index",
                "/search-pypi rich",
                "/delete pypi",
                "/search-pypi rich",
            ],
            tmp_path,
        )
        app.run()
        assert launcher.urls == ["https://pypi.org/search/?q=rich"]
        assert app.dispatcher.get_engine_by_id("pypi") is None
        assert "Unknown search engine: 'pypi'" in buf.getvalue()

    def test_cancelled_choice_continues(self, tmp_path):
        app, launcher, buf, _ = _make_app(
            ["hello", KeyboardInterrupt(), "/search-google again"], tmp_path,
        )
        app.run()
        assert "Cancelled." in buf.getvalue()
        assert launcher.urls == ["http://www.google.com/search?q=again"]

    def test_engines_and_help(self, tmp_path):
        app, _, buf, _ = _make_app(["/engines", "/help", "/config", "/bogus"], tmp_path)
        app.run()
        out = buf.getvalue()
        assert "archwiki" in out
        assert "/search-archwiki" in out
        assert str(tmp_path / "config.toml") in out
        assert "Unknown command: /bogus" in out

    def test_add_usage(self, tmp_path):
        app, _, buf, _ = _make_app(["/add onlyid"], tmp_path)
        app.run()
        assert "Usage: /add <id> <url> <title>" in buf.getvalue()

    def test_delete_unknown_engine(self, tmp_path):
        app, _, buf, _ = _make_app(["/delete ghost"], tmp_path)
        app.run()
        out = buf.getvalue()
        assert "No such engine: ghost" in out
        assert "Removed: ghost" not in out
        assert len(app.dispatcher.registry) == 11
