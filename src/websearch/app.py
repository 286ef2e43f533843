"""Interactive shell - a prompt loop over the dispatcher."""

from __future__ import annotations

import webbrowser

from websearch.config import Config
from websearch.dispatch import Dispatcher
from websearch.exceptions import UnknownEngineError
from websearch.ui.console import Console


class App:
    """Main application facade."""

    def __init__(self, dispatcher: Dispatcher, config: Config, console: Console | None = None):
        self.dispatcher = dispatcher
        self.config = config
        self.console = console or Console()

    def run(self):
        """Main interactive loop."""
        self.console.print_welcome(len(self.dispatcher.registry))

        while True:
            try:
                user_input = self.dispatcher.io.ask_text("websearch> ")
            except (EOFError, KeyboardInterrupt):
                break

            user_input = user_input.strip()
            if not user_input:
                continue

            try:
                if user_input.startswith("/"):
                    if not self._handle_command(user_input):
                        break
                    continue
                self.dispatcher.search(user_input, self.dispatcher.choose_engine())
            except (EOFError, KeyboardInterrupt):
                self.console.print_info("Cancelled.")
            except (UnknownEngineError, webbrowser.Error) as e:
                self.console.print_error(str(e))

        self.console.print_info("Goodbye.")

    def _handle_command(self, cmd: str) -> bool:
        """Handle slash commands. Returns False to exit."""
        parts = cmd.split(maxsplit=1)
        name = parts[0]
        command = name.lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        if command in ("/quit", "/exit", "/q"):
            return False
        elif command == "/help":
            self.console.print_help(self.dispatcher.commands.names())
        elif command == "/engines":
            self.console.print_engines(self.dispatcher.registry)
        elif command == "/add":
            args = rest.split(maxsplit=2)
            if len(args) < 3:
                self.console.print_error("Usage: /add <id> <url> <title>")
            else:
                engine_id, url, title = args
                self.dispatcher.add_engine(engine_id, title, url)
                self.console.print_info(f"Added: {title}. Use '/search-{engine_id}' to search it.")
        elif command == "/delete":
            if not rest:
                self.console.print_error("Usage: /delete <id>")
            elif self.dispatcher.get_engine_by_id(rest) is None:
                self.console.print_error(f"No such engine: {rest}")
            else:
                self.dispatcher.delete_engine(rest)
                self.console.print_info(f"Removed: {rest}")
        elif command == "/config":
            self.console.print_info(f"Config: {self.config.config_path}")
        elif (dispatch := self.dispatcher.commands.get(name[1:])) is not None:
            dispatch(rest or None)
        elif command.startswith("/search-"):
            raise UnknownEngineError(name[len("/search-"):])
        else:
            self.console.print_error(f"Unknown command: {command}")
        return True
