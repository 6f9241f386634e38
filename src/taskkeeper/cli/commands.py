# src/taskkeeper/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from ..core.ports import Console
from ..core.state import AppState
from ..errors import InvalidSelection, TaskNotFoundError
from ..tasks.task_models import Task
from .prompts import ask_date, ask_int, ask_size, ask_status, format_date

MenuHandler = Callable[[AppState, Console], None]

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MenuEntry:
    choice: int
    label: str
    handler: MenuHandler | None
    exits: bool = False


class Menu:
    """Numbered menu: maps a choice to a handler (or to 'leave this menu')."""

    def __init__(self, title: str) -> None:
        self.title = title
        self._entries: dict[int, MenuEntry] = {}

    def register(
        self,
        choice: int,
        label: str,
        handler: MenuHandler | None = None,
        *,
        exits: bool = False,
    ) -> None:
        if handler is None and not exits:
            raise ValueError(f"menu entry {choice} needs a handler")
        self._entries[choice] = MenuEntry(choice=choice, label=label, handler=handler, exits=exits)

    def lines(self, title: str | None = None) -> list[str]:
        out = [f"=== {title or self.title} ==="]
        for choice in sorted(self._entries):
            out.append(f"{choice}. {self._entries[choice].label}")
        return out

    def show(self, console: Console, title: str | None = None) -> None:
        console.say()
        for line in self.lines(title):
            console.say(line)

    def handle(self, state: AppState, console: Console, choice: int) -> bool:
        """
        Run the handler for `choice`.

        Returns False when the entry leaves the menu, True otherwise.
        Raises InvalidSelection for an unknown choice.
        """
        entry = self._entries.get(choice)
        if entry is None:
            keys = sorted(self._entries) or [0]
            raise InvalidSelection(choice, keys[0], keys[-1])
        if entry.exits or entry.handler is None:
            return False
        entry.handler(state, console)
        return True


# ---- rendering ----


def format_task(task: Task) -> str:
    completed = format_date(task.completion_date) if task.completion_date else "N/A"
    return (
        f"Task: {task.name} | Subject: {task.subject} | Due: {format_date(task.due_date)} | "
        f"Created: {format_date(task.creation_date)} | Status: {task.status.name} | "
        f"Size: {task.size.name} | Completed: {completed}"
    )


def show_numbered(console: Console, tasks: Sequence[Task]) -> None:
    for i, task in enumerate(tasks, start=1):
        console.say(f"{i}. {format_task(task)}")


def report_save(console: Console, saved: bool) -> None:
    if saved:
        console.say("Tasks saved successfully!")
    else:
        console.say("Warning: tasks could not be saved; this change may not survive a restart.")


def _show_view(console: Console, header: str, tasks: Sequence[Task], empty: str) -> None:
    console.say()
    console.say(f"=== {header} ===")
    if not tasks:
        console.say(empty)
        return
    show_numbered(console, tasks)


# ---- main menu handlers ----


def cmd_add_task(state: AppState, console: Console) -> None:
    console.say()
    console.say("=== Add New Task ===")
    name = console.ask("Enter task name: ")
    subject = console.ask("Enter subject: ")
    due_date = ask_date(console, "Enter due date (yyyy-MM-dd): ")
    status = ask_status(console)
    size = ask_size(console)

    task = Task(name=name, subject=subject, due_date=due_date, status=status, size=size)
    saved = state.task_store.add_task(task)
    report_save(console, saved)
    console.say("Task added successfully!")


def cmd_list_tasks(state: AppState, console: Console) -> None:
    if not state.task_store.list_all():
        console.say("No tasks found.")
        return

    list_menu.show(console)
    choice = ask_int(console, "Choose an option: ")
    try:
        list_menu.handle(state, console, choice)
    except InvalidSelection:
        console.say("Invalid option.")


def cmd_remove_task(state: AppState, console: Console) -> None:
    store = state.task_store
    if not store.list_all():
        console.say("No tasks to remove.")
        return

    console.say()
    console.say("=== Remove Task ===")
    after = ask_date(console, "Enter date (yyyy-MM-dd) to show tasks created after: ")
    candidates = store.list_created_after(after)
    if not candidates:
        console.say(f"No tasks found created after {format_date(after)}")
        return

    console.say()
    console.say(f"Tasks created after {format_date(after)}:")
    show_numbered(console, candidates)

    index = ask_int(console, f"Enter the index number of the task to delete (1-{len(candidates)}): ")
    try:
        task = pick(candidates, index)
    except InvalidSelection:
        console.say("Invalid index.")
        return

    try:
        saved = store.remove_task(task)
    except TaskNotFoundError:
        logger.warning("Selected task %r vanished before removal.", task.name)
        console.say("Task not found; nothing removed.")
        return
    report_save(console, saved)
    console.say("Task removed successfully!")


def pick(tasks: Sequence[Task], index: int) -> Task:
    """1-based selection from a listing."""
    if not 1 <= index <= len(tasks):
        raise InvalidSelection(index, 1, len(tasks))
    return tasks[index - 1]


# ---- list sub-menu handlers ----


def cmd_list_all(state: AppState, console: Console) -> None:
    _show_view(console, "All Tasks", state.task_store.list_all(), "No tasks found.")


def cmd_list_in_progress(state: AppState, console: Console) -> None:
    _show_view(
        console,
        "In-Progress Tasks (sorted by due date)",
        state.task_store.list_in_progress(),
        "No in-progress tasks found.",
    )


def cmd_list_completed(state: AppState, console: Console) -> None:
    _show_view(
        console,
        "Completed Tasks (sorted by due date)",
        state.task_store.list_completed(),
        "No completed tasks found.",
    )


def cmd_list_created_after(state: AppState, console: Console) -> None:
    after: date = ask_date(console, "Enter date (yyyy-MM-dd) to filter tasks created after: ")
    tasks = state.task_store.list_created_after(after)
    if not tasks:
        console.say(f"No tasks found created after {format_date(after)}")
        return
    _show_view(console, f"Tasks created after {format_date(after)}", tasks, "")


main_menu = Menu("Task Management System")
main_menu.register(1, "Add new task", cmd_add_task)
main_menu.register(2, "List tasks", cmd_list_tasks)
main_menu.register(3, "Remove task", cmd_remove_task)
main_menu.register(4, "Exit", exits=True)

list_menu = Menu("Task List Options")
list_menu.register(1, "All tasks", cmd_list_all)
list_menu.register(2, "In-progress tasks (sorted by due date)", cmd_list_in_progress)
list_menu.register(3, "Completed tasks (sorted by due date)", cmd_list_completed)
list_menu.register(4, "Tasks created after a certain date", cmd_list_created_after)
