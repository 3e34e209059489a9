# src/taskly/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.task_models import ActivityType, TaskItem
from ..tasks.validation import FIELD_NAMES
from ..ui.list_view import format_task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

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
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Arguments are split shell-style, so "activity='Go for a walk'" stays one arg.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _ensure_started(state: AppState) -> None:
    # Hydration is gated by state.ready, so this only loads once.
    state.start()


def _with_notices(state: AppState, text: str) -> str:
    notices = state.drain_notices()
    if not notices:
        return text
    return "\n".join([text, *(f"[notice] {n}" for n in notices)])


def _render_list(state: AppState) -> str:
    return "\n".join(state.list_view.render())


def _created(state: AppState, item: TaskItem) -> str:
    idx = len(state.store.current())
    return _with_notices(state, f"Added:\n  {format_task(idx, item)}")


def _rejected(state: AppState) -> str:
    lines = ["Not added. Fix these fields:"]
    for field in FIELD_NAMES:
        err = state.form.errors.get(field)
        if err is not None:
            lines.append(f"  {field}: {err.message} ({err.reason})")
    return "\n".join(lines)


def _parse_assignments(args: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for arg in args:
        if "=" not in arg:
            raise ValueError(f"expected field=value, got {arg!r}")
        key, value = arg.split("=", 1)
        out[key.strip()] = value
    return out


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_start(state: AppState, args: list[str]) -> str:
    if not state.start():
        return _render_list(state)
    return _with_notices(state, _render_list(state))


def cmd_list(state: AppState, args: list[str]) -> str:
    _ensure_started(state)
    return _render_list(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add activity="Go for a walk" price=0 type=recreational bookingRequired=no accessibility=0.1

    Fields not given keep their form defaults. The form is filled and
    submitted in one step.
    """
    _ensure_started(state)
    if not args:
        return (
            "Usage: /add activity=... price=... type=... [bookingRequired=yes|no] "
            "[accessibility=0..1]"
        )
    try:
        assignments = _parse_assignments(args)
        state.form.reset()
        state.form.fill(assignments)
    except ValueError as e:
        return f"Could not read fields: {e}."
    except KeyError as e:
        return f"Unknown field: {e.args[0]}. Fields: {', '.join(FIELD_NAMES)}."

    item = state.form.submit()
    if item is None:
        return _rejected(state)
    return _created(state, item)


def cmd_set(state: AppState, args: list[str]) -> str:
    """
    /set <field> <value...>   -> edit one form field (value may contain spaces)
    """
    if len(args) < 2:
        return f"Usage: /set <field> <value>. Fields: {', '.join(FIELD_NAMES)}."
    name, value = args[0], " ".join(args[1:])
    try:
        field = state.form.set_field(name, value)
    except KeyError:
        return f"Unknown field: {name}. Fields: {', '.join(FIELD_NAMES)}."
    return f"{field} = {value!r}"


def cmd_form(state: AppState, args: list[str]) -> str:
    return "\n".join(state.form.render())


def cmd_submit(state: AppState, args: list[str]) -> str:
    _ensure_started(state)
    item = state.form.submit()
    if item is None:
        return _rejected(state)
    return _created(state, item)


def cmd_reset(state: AppState, args: list[str]) -> str:
    state.form.reset()
    return "Form cleared."


def cmd_delete(state: AppState, args: list[str]) -> str:
    """
    /delete 2         -> delete row 2
    /delete #2        -> same
    /delete 3f9a1c2e  -> delete by id (full or unique prefix)
    """
    _ensure_started(state)
    if not args:
        return "Usage: /delete <row|id>."
    ref = args[0]
    removed = state.list_view.delete(ref)
    if removed is None:
        return f"No task matches {ref!r}."
    return _with_notices(state, f"Deleted: {removed.activity} [{removed.id}]")


def cmd_types(state: AppState, args: list[str]) -> str:
    return "Activity types: " + ", ".join(t.value for t in ActivityType)


def cmd_status(state: AppState, args: list[str]) -> str:
    storage = state.store.storage
    saved = "OK" if state.store.last_save_ok else "FAILED (in-memory only)"
    return (
        "Status:\n"
        f"  Storage: {storage.describe()}\n"
        f"  Key: {storage.key}\n"
        f"  Ready: {'yes' if state.ready else 'no'}\n"
        f"  Items: {state.store.count()}\n"
        f"  Last save: {saved}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("start", cmd_start, help_text="Get started: load your list and show it.")
registry.register("list", cmd_list, help_text="Show the todo list.", aliases=["ls"])
registry.register(
    "add", cmd_add, help_text="Add an activity: /add activity=... price=... type=... [...]"
)
registry.register("set", cmd_set, help_text="Edit one form field: /set <field> <value>.")
registry.register("form", cmd_form, help_text="Show the form fields and their errors.")
registry.register("submit", cmd_submit, help_text="Submit the form.")
registry.register("reset", cmd_reset, help_text="Clear the form.")
registry.register(
    "delete", cmd_delete, help_text="Delete an item: /delete <row|id>.", aliases=["del", "rm"]
)
registry.register("types", cmd_types, help_text="List activity types.")
registry.register("status", cmd_status, help_text="Show storage and session status.")
