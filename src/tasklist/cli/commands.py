# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.task_models import Task

# Asks the user a follow-up question; None means input ended (EOF).
CommandAsker = Callable[[str], str | None]
CommandHandler = Callable[[AppState, list[str], CommandAsker], str]

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "No todos in list. Returning to menu..."
INVALID_INDEX_MESSAGE = "Input invalid. Please enter a valid todo index."
UNKNOWN_COMMAND_MESSAGE = "Command Unknown. Please try again."
EXIT_ALIASES = ("quit",)

_POSITION_RE = re.compile(r"[0-9]+")


def _no_input(prompt: str) -> str | None:
    return None


class CommandRegistry:
    """Word-command registry used by the console connector (add, remove, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._aliases: dict[str, list[str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._aliases[key] = [a.lower() for a in aliases]
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, ask: CommandAsker | None = None) -> str | None:
        """
        Handle a line like "remove 2" (a leading "/" is accepted too).
        Returns the reply, or None for a blank line.
        """
        parts = line.strip().lstrip("/").split()
        if not parts:
            return None

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return UNKNOWN_COMMAND_MESSAGE

        return handler(state, args, ask or _no_input)

    def names(self) -> list[str]:
        return list(self._help)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {_with_aliases(name, self._aliases[name])} - {help_text}")
        lines.append(f"  {_with_aliases('exit', list(EXIT_ALIASES))} - Quit.")
        return "\n".join(lines)


def _with_aliases(name: str, aliases: list[str]) -> str:
    return f"{name} ({', '.join(aliases)})" if aliases else name


registry = CommandRegistry()


# ---- rendering ----


def format_task_line(position: int, task: Task) -> str:
    status = "✅ Complete" if task.is_completed else "❌ Not Complete"
    return f"{position} - {task.title} - {status}"


def format_task_list(tasks: list[Task]) -> str:
    if not tasks:
        return "No todos in list."
    return "\n".join(format_task_line(i, t) for i, t in enumerate(tasks, start=1))


def format_task_details(task: Task) -> str:
    status = "✅ Complete" if task.is_completed else "❌ Incomplete"
    return f"Title - {task.title}\nDescription - {task.description}\nStatus - {status}"


# ---- helpers ----


def parse_position(raw: str | None, size: int) -> int | None:
    """Turn a user-typed 1-based number into a zero-based index, or None if invalid."""
    # Plain ASCII digits only: no sign, underscores, spaces or other scripts.
    if raw is None or not _POSITION_RE.fullmatch(raw):
        return None
    number = int(raw)
    if not 1 <= number <= size:
        return None
    return number - 1


def _persist(state: AppState) -> bool:
    # Write-through: every mutation is followed by a full snapshot save.
    ok = state.storage.save(state.manager.list_all())
    if not ok:
        logger.warning("Save failed; changes are kept in memory for this run only.")
    return ok


def _pick_position(state: AppState, args: list[str], ask: CommandAsker, question: str) -> int | None:
    if args:
        return parse_position(args[0], len(state.manager))
    prompt = f"{question}\n{format_task_list(state.manager.list_all())}\nEnter todo number below: "
    return parse_position(ask(prompt), len(state.manager))


# ---- handlers ----


def cmd_help(state: AppState, args: list[str], ask: CommandAsker) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], ask: CommandAsker) -> str:
    return format_task_list(state.manager.list_all())


def cmd_add(state: AppState, args: list[str], ask: CommandAsker) -> str:
    """Prompt for title, then description. Both are stored exactly as typed."""
    title = ask("Please enter a title: ")
    if title is None:
        return "Title Invalid. Please try again."

    description = ask("Please enter a description: ")
    if description is None:
        return "Description Invalid. Please try again."

    task = state.manager.add_task(title, description)
    _persist(state)
    return f"'{task.title}' has been added!"


def cmd_remove(state: AppState, args: list[str], ask: CommandAsker) -> str:
    if not len(state.manager):
        return EMPTY_LIST_MESSAGE

    index = _pick_position(state, args, ask, "Please select a todo you'd like to remove")
    if index is None:
        return INVALID_INDEX_MESSAGE

    task = state.manager.remove_task(index)
    _persist(state)
    return f"{task.title} has been removed!"


def cmd_view(state: AppState, args: list[str], ask: CommandAsker) -> str:
    if not len(state.manager):
        return EMPTY_LIST_MESSAGE

    index = _pick_position(state, args, ask, "Which todo would you like more information of?")
    if index is None:
        return INVALID_INDEX_MESSAGE

    return format_task_details(state.manager.get_task(index))


def cmd_complete(state: AppState, args: list[str], ask: CommandAsker) -> str:
    if not len(state.manager):
        return EMPTY_LIST_MESSAGE

    index = _pick_position(state, args, ask, "Which todo would you like to toggle?")
    if index is None:
        return INVALID_INDEX_MESSAGE

    task = state.manager.toggle_completion(index)
    _persist(state)
    if task.is_completed:
        return f"'{task.title}' has been completed! Good job!"
    return f"'{task.title}' is incomplete."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show all todos.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a todo (prompts for title and description).")
registry.register("remove", cmd_remove, help_text="Remove a todo: remove [number].", aliases=["rm"])
registry.register("view", cmd_view, help_text="Show a todo's details: view [number].")
registry.register(
    "complete", cmd_complete, help_text="Toggle a todo's completion: complete [number].", aliases=["done"]
)
