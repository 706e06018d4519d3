#!/usr/bin/env python3
"""Task records as written by Claude Code's task tools.

Each task lives in its own JSON file inside a task list directory:

    <claude home>/tasks/
    ├── myproject-dev/
    │   ├── 1.json
    │   └── 2.json
    └── 0f1e2d3c-....-............/
        └── 1.json

Only the fields the Stop hook reasons about are modelled; everything else
in the file (description, activeForm, blocks, owner, ...) is ignored.

Usage:
    from check_tasks_hook.lib.task_model import Task, TaskStatus

    task = Task.model_validate_json(path.read_text())
    if task.status is TaskStatus.PENDING:
        ...
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator


class TaskStatus(StrEnum):
    """Task lifecycle states."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Task(BaseModel):
    """A single task record."""

    model_config = ConfigDict(extra="ignore")

    id: str
    subject: str
    status: TaskStatus

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        # Some writers store numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def is_open(self) -> bool:
        """True while the task still needs work (pending or in progress)."""
        return self.status in (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)
