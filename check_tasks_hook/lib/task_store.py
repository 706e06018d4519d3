#!/usr/bin/env python3
"""Read-only access to Claude Code's task store.

The store is a directory with one sub-directory per task list and one JSON
file per task. This module never writes: the task tools own the store and may
be mutating it while we read. Anything missing, unreadable or malformed reads
as empty, so a broken store can only ever let a stop through.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from check_tasks_hook.lib.paths import get_tasks_root
from check_tasks_hook.lib.task_model import Task

logger = logging.getLogger(__name__)

TASK_FILE_SUFFIX = ".json"

# List ids are directory names; anything that could walk out of the root is rejected
_UNSAFE_LIST_ID = re.compile(r"[/\\]|^\.{1,2}$")


def _task_file_sort_key(path: Path) -> tuple[int, int, str]:
    """Order task files numerically when the stem is a number (1, 2, 10)."""
    stem = path.stem
    if stem.isdigit():
        return (0, int(stem), stem)
    return (1, 0, stem)


class TaskStore:
    """Directory-backed task lists.

    Args:
        root: Task store root. Defaults to <claude home>/tasks, resolved at
            construction time.
    """

    def __init__(self, root: Path | None = None):
        self.root = root if root is not None else get_tasks_root()

    def list_task_lists(self) -> list[str]:
        """Return the names of all task lists, sorted for stable ordering."""
        if not self.root.is_dir():
            return []
        try:
            return sorted(entry.name for entry in self.root.iterdir() if entry.is_dir())
        except OSError as e:
            logger.debug("Cannot list task root %s: %s", self.root, e)
            return []

    def list_dir(self, list_id: str) -> Path | None:
        """Return the directory backing a task list, or None if the id is unusable."""
        if not list_id or _UNSAFE_LIST_ID.search(list_id):
            logger.debug("Rejecting task list id %r", list_id)
            return None
        return self.root / list_id

    def load_tasks(self, list_id: str) -> list[Task]:
        """Load every valid task in a list, in enumeration order.

        Files that cannot be read or do not validate as a Task are skipped
        individually; a missing list is simply empty.
        """
        tasks_dir = self.list_dir(list_id)
        if tasks_dir is None or not tasks_dir.is_dir():
            return []

        try:
            task_files = sorted(
                (p for p in tasks_dir.iterdir() if p.suffix == TASK_FILE_SUFFIX and p.is_file()),
                key=_task_file_sort_key,
            )
        except OSError as e:
            logger.debug("Cannot list task directory %s: %s", tasks_dir, e)
            return []

        tasks: list[Task] = []
        for task_file in task_files:
            try:
                tasks.append(Task.model_validate_json(task_file.read_bytes()))
            except (OSError, ValidationError) as e:
                logger.debug("Skipping unreadable task file %s: %s", task_file, e)
        return tasks
