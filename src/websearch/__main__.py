"""Entry point for the websearch CLI."""

from __future__ import annotations

import argparse
import webbrowser
from pathlib import Path

from websearch.exceptions import UnknownEngineError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="websearch",
        description="Open a web search for some text with a named search engine",
    )
    parser.add_argument(
        "text", nargs="*",
        help="Text to search for (prompted for when omitted)",
    )
    parser.add_argument(
        "--engine", "-e",
        help="Engine id to search with (e.g. google, wikipedia-en)",
    )
    parser.add_argument(
        "--list", "-l", action="store_true",
        help="List the available engines and exit",
    )
    parser.add_argument(
        "--print", "-p", dest="print_only", action="store_true",
        help="Print the search URL instead of opening a browser",
    )
    parser.add_argument(
        "--browser", "-b",
        help="Browser to open (a name known to Python's webbrowser module)",
    )
    parser.add_argument(
        "--shell", "-s", action="store_true",
        help="Start an interactive search shell",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log debug output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    from websearch.app import App
    from websearch.browser import PrintLauncher, WebBrowserLauncher
    from websearch.config import Config
    from websearch.dispatch import Dispatcher
    from websearch.log import parse_level, setup_logging
    from websearch.ui.console import Console
    from websearch.ui.prompt import Prompt

    console = Console()

    try:
        config = Config.load(workspace=Path.cwd())
    except ValueError as e:
        console.print_error(f"Invalid configuration: {e}")
        return 1

    config.ensure_data_dir()
    level = parse_level("DEBUG" if args.verbose else config.log_level)
    setup_logging(config.log_dir, level=level)

    if args.print_only:
        launcher = PrintLauncher(console.print_url)
    else:
        launcher = WebBrowserLauncher(
            browser=args.browser or config.browser,
            new_window=config.new_window,
        )

    try:
        dispatcher = Dispatcher.from_config(
            config,
            io=Prompt(history_file=config.history_path),
            launcher=launcher,
        )
    except ValueError as e:
        # engine filters are resolved here
        console.print_error(f"Invalid configuration: {e}")
        return 1

    text = " ".join(args.text) or None

    try:
        if args.list:
            console.print_engines(dispatcher.registry)
        elif args.shell:
            App(dispatcher, config, console).run()
        elif args.engine and text is not None:
            dispatcher.search(text, args.engine)
        elif args.engine:
            command = dispatcher.commands.get(f"search-{args.engine}")
            if command is None:
                raise UnknownEngineError(args.engine)
            command()
        else:
            dispatcher.interactive_search(selection=text)
    except (EOFError, KeyboardInterrupt):
        console.print_info("Aborted.")
        return 130
    except (UnknownEngineError, webbrowser.Error) as e:
        console.print_error(str(e))
        return 1
    except UnicodeEncodeError as e:
        console.print_error(f"Cannot encode search text: {e.reason}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
