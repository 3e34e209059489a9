# src/taskly/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..ui.landing import render_landing

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _print_block(lines: list[str]) -> None:
    for line in lines:
        print(line)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "Taskly"))

    if getattr(state.settings, "show_landing", True):
        _print_block(render_landing(app_name))
    else:
        state.start()
        _print_block(state.list_view.render())
    _print_ts("Type /help for commands. Use /exit to quit.\n")

    # Store notifications arrive mid-command; print the re-rendered list after the reply.
    pending_render: list[list[str]] = []
    state.list_view.set_render_sink(pending_render.append)

    try:
        while True:
            try:
                user_input = input(f"{app_name}> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not user_input.startswith("/"):
                print("Commands start with '/'. Try /help, or /add activity=... to add an item.")
                continue

            try:
                response = command_registry.handle(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response is not None:
                _print_ts(response)

            for notice in state.drain_notices():
                _print_ts(f"[notice] {notice}")

            if pending_render:
                _print_block(pending_render[-1])
                pending_render.clear()
            print()
    finally:
        state.list_view.set_render_sink(None)

    logger.info("Console connector finished.")
