#!/usr/bin/env python3
"""
Stop decision engine.

Decides whether the agent may stop, based on the open tasks of the task
list(s) that belong to the current session:

1. Load config from the ordered sources. Disabled -> approve.
2. Resolve task lists: the configured ``taskListId``, or the current
   project's lists ranked by directory name and narrowed by keyword. No
   lists -> approve. Lists are never taken from outside the project.
3. If the session has a custom title and keywords are configured, the title
   (or the configured list id) must contain a keyword, otherwise approve.
4. Count tasks across the lists. Nothing open -> approve, else block with a
   continuation prompt.

Each step returns as soon as it reaches a decision.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from check_tasks_hook.lib.config import (
    CheckTasksConfig,
    ConfigSource,
    default_sources,
    resolve_config,
)
from check_tasks_hook.lib.decision import StopDecision
from check_tasks_hook.lib.list_matcher import rank_task_lists
from check_tasks_hook.lib.paths import get_templates_dir
from check_tasks_hook.lib.project_ids import get_project_identifiers
from check_tasks_hook.lib.session_name import get_session_name
from check_tasks_hook.lib.task_model import Task, TaskStatus
from check_tasks_hook.lib.task_store import TaskStore
from check_tasks_hook.lib.template_loader import load_template

logger = logging.getLogger(__name__)

MAX_LISTED_TASKS = 3
STOP_BLOCKED_TEMPLATE = "stop-blocked.md"


def contains_keyword(name: str, keywords: Sequence[str]) -> bool:
    """Case-insensitive substring match against any keyword."""
    name_lower = name.lower()
    return any(keyword.lower() in name_lower for keyword in keywords)


@dataclass
class TaskSummary:
    """Tasks aggregated across the resolved lists."""

    pending: list[Task] = field(default_factory=list)
    in_progress: list[Task] = field(default_factory=list)
    completed: list[Task] = field(default_factory=list)
    active_lists: list[str] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return len(self.pending) + len(self.in_progress)

    def add_list(self, list_id: str, tasks: Sequence[Task]) -> None:
        """Partition one list's tasks by status and fold them into the totals."""
        pending = [t for t in tasks if t.status is TaskStatus.PENDING]
        in_progress = [t for t in tasks if t.status is TaskStatus.IN_PROGRESS]
        completed = [t for t in tasks if t.status is TaskStatus.COMPLETED]

        if pending or in_progress:
            self.active_lists.append(list_id)

        self.pending.extend(pending)
        self.in_progress.extend(in_progress)
        self.completed.extend(completed)


def format_block_message(summary: TaskSummary, template_path: Path | None = None) -> str:
    """Render the continuation prompt for a blocked stop."""
    if summary.active_lists:
        list_info = " in " + ", ".join(f'"{name}"' for name in summary.active_lists)
    else:
        list_info = ""

    if summary.pending:
        lines = ["Next pending tasks:"]
        lines.extend(f"- {task.subject}" for task in summary.pending[:MAX_LISTED_TASKS])
        extra = len(summary.pending) - MAX_LISTED_TASKS
        if extra > 0:
            lines.append(f"... and {extra} more pending tasks")
        next_tasks = "\n".join(lines)
    else:
        next_tasks = "No pending tasks left: finish the tasks already in progress."

    return load_template(
        template_path or get_templates_dir() / STOP_BLOCKED_TEMPLATE,
        {
            "remaining": summary.remaining,
            "list_info": list_info,
            "pending": len(summary.pending),
            "in_progress": len(summary.in_progress),
            "completed": len(summary.completed),
            "next_tasks": next_tasks,
        },
    )


class DecisionEngine:
    """Evaluates Stop events against the task store.

    Args:
        sources: Config sources in priority order (default: project, global,
            environment).
        store: Task store to read (default: <claude home>/tasks).
        template_path: Block message template (default: hooks/templates/stop-blocked.md).
    """

    def __init__(
        self,
        sources: Sequence[ConfigSource] | None = None,
        store: TaskStore | None = None,
        template_path: Path | None = None,
    ):
        self.sources = list(sources) if sources is not None else default_sources()
        self.store = store if store is not None else TaskStore()
        self.template_path = template_path

    def project_task_lists(self, cwd: str) -> list[str]:
        """All task lists belonging to the project at ``cwd``, best match first."""
        identifiers = get_project_identifiers(cwd)
        if not identifiers:
            return []
        return rank_task_lists(self.store.list_task_lists(), identifiers)

    def resolve_task_lists(self, cwd: str, config: CheckTasksConfig) -> list[str]:
        """Which task lists this session must finish before stopping."""
        if config.task_list_id:
            return [config.task_list_id]

        ranked = self.project_task_lists(cwd)
        if not ranked or not config.keywords:
            return ranked

        filtered = [name for name in ranked if contains_keyword(name, config.keywords)]
        # No keyword hit: the project's other lists still count
        return filtered or ranked

    def session_matches_keywords(self, session_name: str, config: CheckTasksConfig) -> bool:
        if contains_keyword(session_name, config.keywords):
            return True
        return bool(config.task_list_id) and contains_keyword(config.task_list_id, config.keywords)

    def summarize(self, list_ids: Sequence[str]) -> TaskSummary:
        summary = TaskSummary()
        for list_id in list_ids:
            summary.add_list(list_id, self.store.load_tasks(list_id))
        return summary

    def evaluate(self, cwd: str, transcript_path: str | None = None) -> StopDecision:
        """Decide whether the agent may stop.

        Args:
            cwd: Working directory of the session
            transcript_path: Session transcript, if the host supplied one

        Returns:
            StopDecision (approve, or block with a continuation prompt)
        """
        config = resolve_config(cwd, self.sources)
        if not config.enabled:
            return StopDecision.approve("disabled")

        list_ids = self.resolve_task_lists(cwd, config)
        if not list_ids:
            logger.debug("No task lists for %s", cwd)
            return StopDecision.approve("no_task_lists")

        session_name = get_session_name(transcript_path) if transcript_path else None
        if session_name and config.keywords:
            if not self.session_matches_keywords(session_name, config):
                logger.debug("Session %r does not match keywords %s", session_name, config.keywords)
                return StopDecision.approve("session_not_matched", session_name=session_name)

        summary = self.summarize(list_ids)
        counts = {
            "pending": len(summary.pending),
            "in_progress": len(summary.in_progress),
            "completed": len(summary.completed),
        }
        if summary.remaining == 0:
            return StopDecision.approve("all_tasks_done", task_lists=list_ids, **counts)

        logger.info(
            "Blocking stop: %d tasks remaining in %s", summary.remaining, summary.active_lists
        )
        return StopDecision.block(
            format_block_message(summary, self.template_path),
            task_lists=list_ids,
            active_lists=summary.active_lists,
            **counts,
        )
