# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from taskkeeper.config import Settings
from taskkeeper.core.state import AppState
from taskkeeper.tasks.task_models import Task, TaskSize, TaskStatus
from taskkeeper.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test directory; never reads the real environment."""
    data_dir = tmp_path / "data"
    return Settings(
        app_name="Task Management System",
        log_level="WARNING",
        log_file_enabled=False,
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.json",
    )


@pytest.fixture()
def store(settings: Settings) -> TaskStore:
    return TaskStore(settings.tasks_path)


@pytest.fixture()
def state(settings: Settings, store: TaskStore) -> AppState:
    # Real JSON store: its persistence is part of what the menu tests check.
    return AppState(settings=settings, task_store=store)


@pytest.fixture()
def make_task():
    def _make(
        name: str = "task",
        *,
        subject: str = "General",
        due: date = date(2024, 1, 10),
        status: TaskStatus = TaskStatus.NOT_STARTED,
        size: TaskSize = TaskSize.MEDIUM,
        created: date = date(2024, 1, 1),
        completed: date | None = None,
    ) -> Task:
        return Task(
            name=name,
            subject=subject,
            due_date=due,
            status=status,
            size=size,
            creation_date=created,
            completion_date=completed,
        )

    return _make
