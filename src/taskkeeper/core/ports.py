# src/taskkeeper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the CLI shell.

Menu handlers depend on these Protocols instead of the concrete JSON store,
which keeps the store swappable and lets tests drive the menus with fakes.
"""

from datetime import date
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    # Mutations (each persists; the bool says whether the save succeeded)
    def add_task(self, task: Task) -> bool: ...
    def remove_task(self, task: Task) -> bool: ...
    def replace_task(self, old: Task, new: Task) -> bool: ...

    # Views
    def list_all(self) -> list[Task]: ...
    def list_in_progress(self) -> list[Task]: ...
    def list_completed(self) -> list[Task]: ...
    def list_created_after(self, day: date) -> list[Task]: ...


class Console(Protocol):
    """Line-based terminal I/O. `ask` raises EOFError when input is exhausted."""

    def ask(self, prompt: str) -> str: ...
    def say(self, text: str = "") -> None: ...
