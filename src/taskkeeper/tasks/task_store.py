# src/taskkeeper/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from datetime import date
from enum import StrEnum
from pathlib import Path
from typing import Any

from ..errors import LoadFailure, SaveFailure, TaskNotFoundError
from .task_models import Task, TaskSize, TaskStatus

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class LoadStatus(StrEnum):
    NOT_LOADED = "not_loaded"
    LOADED = "loaded"
    MISSING = "missing"
    FAILED = "failed"


class TaskStore:
    """
    JSON-file task store.

    The in-memory list is authoritative for the life of the process:
    - load() is called once at startup; a missing or unreadable file yields an empty list
    - every add/remove/replace rewrites the whole file (temp file + os.replace)
    - a failed save is recorded and logged, never raised

    A corrupt file is never deleted or repaired here; the next successful save overwrites it.
    """

    def __init__(self, path: str | Path = "tasks.json", *, autoload: bool = True) -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []
        self.load_status = LoadStatus.NOT_LOADED
        self.last_load_error: LoadFailure | None = None
        self.last_save_error: SaveFailure | None = None
        if autoload:
            self.load()
        logger.info("TaskStore ready path=%s total=%s", self._path, len(self._tasks))

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- persistence ----

    def load(self) -> list[Task]:
        """Replace the in-memory list with the file contents and return a copy of it."""
        self.last_load_error = None

        if not self._path.exists():
            self._tasks = []
            self.load_status = LoadStatus.MISSING
            logger.info("No task file at %s; starting with an empty list.", self._path)
            return []

        try:
            raw = self._path.read_text("utf-8")
            tasks = _decode_document(json.loads(raw))
        except (OSError, ValueError, TypeError, KeyError, RecursionError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors; deeply nested
            # garbage exhausts the decoder stack with RecursionError.
            err = LoadFailure(self._path, str(e) or type(e).__name__)
            err.__cause__ = e
            self.last_load_error = err
            self._tasks = []
            self.load_status = LoadStatus.FAILED
            logger.warning("%s; starting with an empty list (file left untouched).", err)
            return []

        self._tasks = tasks
        self.load_status = LoadStatus.LOADED
        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return list(tasks)

    def save(self, tasks: Iterable[Task] | None = None) -> bool:
        """
        Write the whole sequence (the in-memory list by default), replacing the file.

        Returns False on failure; the error is kept in `last_save_error`.
        """
        snapshot = list(self._tasks if tasks is None else tasks)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            payload = json.dumps(_encode_document(snapshot), ensure_ascii=False, indent=2)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            err = SaveFailure(self._path, e.strerror or str(e))
            err.__cause__ = e
            self.last_save_error = err
            logger.warning("%s; in-memory tasks are kept.", err)
            if tmp.exists():
                try:
                    tmp.unlink()
                except OSError:
                    logger.debug("Could not remove temp file %s", tmp, exc_info=True)
            return False

        self.last_save_error = None
        logger.debug("Saved %d tasks to %s", len(snapshot), self._path)
        return True

    # ---- mutations ----

    def add_task(self, task: Task) -> bool:
        """Append `task` and persist. Returns whether the save succeeded."""
        self._tasks.append(task)
        logger.debug("Task added name=%r status=%s due=%s", task.name, task.status, task.due_date)
        return self.save()

    def remove_task(self, task: Task) -> bool:
        """
        Remove the first occurrence of `task` and persist.

        Raises TaskNotFoundError (without touching the file) if the store does not hold it.
        Returns whether the save succeeded.
        """
        idx = self._index_of(task)
        del self._tasks[idx]
        logger.debug("Task removed name=%r index=%d", task.name, idx)
        return self.save()

    def replace_task(self, old: Task, new: Task) -> bool:
        """Swap `old` for `new` in place (wholesale, no partial updates) and persist."""
        idx = self._index_of(old)
        self._tasks[idx] = new
        logger.debug("Task replaced name=%r index=%d status=%s", new.name, idx, new.status)
        return self.save()

    def _index_of(self, task: Task) -> int:
        # Identity first: equal-valued duplicates are allowed and must not shadow the one picked.
        for i, t in enumerate(self._tasks):
            if t is task:
                return i
        for i, t in enumerate(self._tasks):
            if t == task:
                return i
        raise TaskNotFoundError(f"Task {task.name!r} is not in the store")

    # ---- queries ----

    def list_all(self) -> list[Task]:
        return list(self._tasks)

    def list_in_progress(self) -> list[Task]:
        """IN_PROGRESS tasks by due date; equal dates keep insertion order."""
        return sorted(
            (t for t in self._tasks if t.status == TaskStatus.IN_PROGRESS),
            key=lambda t: t.due_date,
        )

    def list_completed(self) -> list[Task]:
        """DONE tasks by due date; equal dates keep insertion order."""
        return sorted(
            (t for t in self._tasks if t.is_done),
            key=lambda t: t.due_date,
        )

    def list_created_after(self, day: date) -> list[Task]:
        """Tasks created strictly after `day`, in insertion order."""
        return [t for t in self._tasks if t.creation_date > day]


# ---- codec ----


def _encode_task(task: Task) -> dict[str, Any]:
    return {
        "name": task.name,
        "subject": task.subject,
        "due_date": task.due_date.isoformat(),
        "creation_date": task.creation_date.isoformat(),
        "completion_date": task.completion_date.isoformat() if task.completion_date else None,
        "status": task.status.value,
        "size": task.size.value,
    }


def _encode_document(tasks: list[Task]) -> dict[str, Any]:
    return {"version": FORMAT_VERSION, "tasks": [_encode_task(t) for t in tasks]}


def _str_field(raw: dict[str, Any], key: str) -> str:
    val = raw[key]
    if not isinstance(val, str):
        raise TypeError(f"field {key!r} must be a string, got {type(val).__name__}")
    return val


def _date_field(raw: dict[str, Any], key: str) -> date:
    return date.fromisoformat(_str_field(raw, key))


def _decode_task(raw: Any) -> Task:
    if not isinstance(raw, dict):
        raise TypeError(f"task record must be an object, got {type(raw).__name__}")

    status = TaskStatus(_str_field(raw, "status"))
    completion_raw = raw.get("completion_date")
    completion = date.fromisoformat(completion_raw) if completion_raw is not None else None

    # The file must already honour the completion-date rule; Task() would silently fix it.
    if (completion is not None) != (status == TaskStatus.DONE):
        raise ValueError(f"completion_date {completion_raw!r} contradicts status {status.value!r}")

    return Task(
        name=_str_field(raw, "name"),
        subject=_str_field(raw, "subject"),
        due_date=_date_field(raw, "due_date"),
        status=status,
        size=TaskSize(_str_field(raw, "size")),
        creation_date=_date_field(raw, "creation_date"),
        completion_date=completion,
    )


def _decode_document(doc: Any) -> list[Task]:
    if not isinstance(doc, dict):
        raise TypeError("task file must hold a JSON object")
    version = doc.get("version")
    if version != FORMAT_VERSION:
        raise ValueError(f"unsupported task file version {version!r}")
    records = doc.get("tasks")
    if not isinstance(records, list):
        raise TypeError("'tasks' must be a list")
    return [_decode_task(r) for r in records]
