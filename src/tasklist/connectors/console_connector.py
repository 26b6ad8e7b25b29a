# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import EXIT_ALIASES, format_task_list
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", *EXIT_ALIASES)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _make_ask(read: InputFn) -> Callable[[str], str | None]:
    def ask(prompt: str) -> str | None:
        try:
            return read(prompt)
        except EOFError:
            return None

    return ask


def run_console_loop(state: AppState, *, read: InputFn = input, write: OutputFn = print) -> None:
    """
    Interactive REPL: show the list, read a command, run it, repeat.

    Ends on "exit", EOF or Ctrl+C.
    """
    logger.info("Console connector started.")
    write(f"Welcome to {state.settings.app_name}!\n")

    ask = _make_ask(read)
    options = ", ".join([*command_registry.names(), "exit"])

    while True:
        write(format_task_list(state.manager.list_all()))
        try:
            user_input = read(f"\nPlease select an option ({options}): ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            write("Input invalid. Please try again.\n")
            continue

        if user_input.lstrip("/").lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, ask=ask)
        except KeyboardInterrupt:
            write("")
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            write(f"{reply}\n")

    logger.info("Console connector finished.")
