# src/taskkeeper/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from .ports import TaskRepo


@dataclass
class AppState:
    """Everything a menu handler may touch; built once by cli.bootstrap."""

    settings: Settings
    task_store: TaskRepo
