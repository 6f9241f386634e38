# src/taskkeeper/cli/prompts.py

"""
Prompt helpers for the menu shell.

Parsers raise ParseFailure; the ask_* helpers turn that into an unbounded reprompt.
EOFError from the console is never caught here: it propagates to the console loop,
which treats it as an implicit exit.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import date

from ..core.ports import Console
from ..errors import ParseFailure
from ..tasks.task_models import TaskSize, TaskStatus

logger = logging.getLogger(__name__)

DATE_FORMAT_HINT = "yyyy-MM-dd"
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_INT_RE = re.compile(r"^[+-]?\d+$", re.ASCII)


class StdConsole:
    """Console backed by input()/print()."""

    def __init__(
        self,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._read = read
        self._write = write

    def ask(self, prompt: str) -> str:
        return self._read(prompt)

    def say(self, text: str = "") -> None:
        self._write(text)


def parse_int(raw: str) -> int:
    text = raw.strip()
    if not _INT_RE.match(text):
        raise ParseFailure(raw, "a number")
    return int(text)


def parse_date(raw: str) -> date:
    """Strict yyyy-MM-dd (four-digit year, two-digit month and day)."""
    text = raw.strip()
    if not _DATE_RE.match(text):
        raise ParseFailure(raw, f"a {DATE_FORMAT_HINT} date")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ParseFailure(raw, f"a {DATE_FORMAT_HINT} date") from None


def format_date(day: date) -> str:
    return day.isoformat()


def ask_int(console: Console, prompt: str) -> int:
    raw = console.ask(prompt)
    while True:
        try:
            return parse_int(raw)
        except ParseFailure as e:
            logger.debug("%s", e)
            raw = console.ask("Invalid input. Please enter a number: ")


def ask_date(console: Console, prompt: str) -> date:
    while True:
        raw = console.ask(prompt)
        try:
            return parse_date(raw)
        except ParseFailure as e:
            logger.debug("%s", e)
            console.say(f"Invalid date format. Please use {DATE_FORMAT_HINT} format.")


def ask_status(console: Console) -> TaskStatus:
    console.say("Select status:")
    for i, status in enumerate(TaskStatus, start=1):
        console.say(f"{i}. {status.label}")
    status = TaskStatus.from_choice(ask_int(console, f"Choose status (1-{len(TaskStatus)}): "))
    if status is None:
        console.say(f"Invalid choice. Defaulting to {TaskStatus.NOT_STARTED.label}.")
        return TaskStatus.NOT_STARTED
    return status


def ask_size(console: Console) -> TaskSize:
    console.say("Select size:")
    for i, size in enumerate(TaskSize, start=1):
        console.say(f"{i}. {size.label}")
    size = TaskSize.from_choice(ask_int(console, f"Choose size (1-{len(TaskSize)}): "))
    if size is None:
        console.say(f"Invalid choice. Defaulting to {TaskSize.MEDIUM.label}.")
        return TaskSize.MEDIUM
    return size
