# src/taskkeeper/tasks/task_models.py

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class TaskStatus(StrEnum):
    """Task lifecycle status. Values are what the JSON store holds."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_choice(cls, choice: int) -> TaskStatus | None:
        """Map a 1-based menu choice to a status; None when out of range."""
        members = list(cls)
        if 1 <= choice <= len(members):
            return members[choice - 1]
        return None


class TaskSize(StrEnum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_choice(cls, choice: int) -> TaskSize | None:
        members = list(cls)
        if 1 <= choice <= len(members):
            return members[choice - 1]
        return None


_STATUS_LABELS = {
    TaskStatus.NOT_STARTED: "Not Started",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}


@dataclass(slots=True, frozen=True)
class Task:
    """
    A single unit of work.

    Tasks are values: status changes go through set_status(), which returns a new Task.
    Construction applies the same completion-date rule, so a task created as DONE is
    stamped with today's date and a task created in any other status carries none.
    """

    name: str
    subject: str
    due_date: date
    status: TaskStatus = TaskStatus.NOT_STARTED
    size: TaskSize = TaskSize.MEDIUM
    creation_date: date = field(default_factory=date.today)
    completion_date: date | None = None

    def __post_init__(self) -> None:
        completion = _completion_for(self.status, self.completion_date, None)
        if completion != self.completion_date:
            object.__setattr__(self, "completion_date", completion)

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE


def _completion_for(status: TaskStatus, current: date | None, today: date | None) -> date | None:
    if status != TaskStatus.DONE:
        return None
    if current is not None:
        return current
    return today or date.today()


def set_status(task: Task, new_status: TaskStatus, *, today: date | None = None) -> Task:
    """
    Return `task` moved to `new_status`.

    DONE stamps completion_date with `today` (local date by default) only if it was unset;
    any other status clears it.
    """
    completion = _completion_for(new_status, task.completion_date, today)
    return dataclasses.replace(task, status=new_status, completion_date=completion)
