# src/taskkeeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes settings once (injected or from the environment),
- ensures local (gitignored) directories exist,
- builds the task store (which loads the task file) and wraps it in AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    A missing directory that cannot be created is logged; the store then starts empty
    and reports save failures on its own.
    """
    if settings is None:
        settings = get_settings()

    try:
        _ensure_local_dirs(settings)
    except OSError:
        logger.warning("Could not create data directories under %s", settings.data_dir, exc_info=True)

    return AppState(settings=settings, task_store=TaskStore(settings.tasks_path))
