# src/taskkeeper/errors.py

"""Error taxonomy.

None of these is fatal in normal operation:
- ParseFailure: recovered locally by reprompting.
- LoadFailure: recorded by the store, which starts empty.
- SaveFailure: recorded by the store, in-memory state stays authoritative.
- InvalidSelection: reported to the user, control returns to the enclosing menu.
- TaskNotFoundError: a remove/replace referenced a task the store does not hold.
"""

from __future__ import annotations

from pathlib import Path


class TaskkeeperError(Exception):
    """Base class for all taskkeeper errors."""


class ParseFailure(TaskkeeperError, ValueError):
    def __init__(self, raw: str, expected: str) -> None:
        super().__init__(f"Cannot parse {raw!r} as {expected}")
        self.raw = raw
        self.expected = expected


class LoadFailure(TaskkeeperError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to load tasks from {path}: {reason}")
        self.path = path
        self.reason = reason


class SaveFailure(TaskkeeperError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to save tasks to {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidSelection(TaskkeeperError, ValueError):
    def __init__(self, choice: int, low: int, high: int) -> None:
        super().__init__(f"Selection {choice} is outside {low}-{high}")
        self.choice = choice
        self.low = low
        self.high = high


class TaskNotFoundError(TaskkeeperError, LookupError):
    """Raised when a task handed to the store is not part of it."""
