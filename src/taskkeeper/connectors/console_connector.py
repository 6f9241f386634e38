# src/taskkeeper/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import main_menu
from ..cli.prompts import StdConsole, ask_int
from ..core.ports import Console
from ..core.state import AppState
from ..errors import InvalidSelection
from ..tasks.task_store import LoadStatus, TaskStore

logger = logging.getLogger(__name__)


def _load_notice(state: AppState) -> str | None:
    store = state.task_store
    if not isinstance(store, TaskStore):
        return None
    if store.load_status == LoadStatus.LOADED:
        return f"Tasks loaded successfully! ({len(store)} tasks found)"
    if store.load_status == LoadStatus.MISSING:
        return "No existing task file found. Starting with empty task list."
    if store.load_status == LoadStatus.FAILED:
        return f"Error loading tasks: {store.last_load_error}. Starting with empty task list."
    return None


def run_console_loop(state: AppState, console: Console | None = None) -> None:
    """
    Main menu loop. Returns when the user picks Exit or input ends (EOF / Ctrl+C).

    Handler errors never end the loop: they are logged and reported, then the menu is shown again.
    """
    console = console or StdConsole()
    app_name = state.settings.app_name
    logger.info("Console connector started.")

    notice = _load_notice(state)
    if notice:
        console.say(notice)
    console.say(f"Welcome to {app_name}!")

    while True:
        try:
            main_menu.show(console, title=app_name)
            choice = ask_int(console, "Choose an option: ")
            if not main_menu.handle(state, console, choice):
                logger.info("Console exit command received.")
                break
        except InvalidSelection:
            console.say("Invalid option. Please try again.")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            console.say()
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            console.say()
            break
        except Exception:
            logger.exception("Menu handler crashed.")
            console.say("Internal error while handling that option.")

    console.say(f"Thank you for using {app_name}!")
    logger.info("Console connector finished.")
