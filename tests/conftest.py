"""Shared fixtures: a throw-away Claude home with a task store."""

import json
from pathlib import Path

import pytest

from check_tasks_hook.lib.config import CheckTasksConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's real config and environment out of every test."""
    for var in ("CLAUDE_CODE_TASK_LIST_ID", "CHECK_TASKS_KEYWORDS", "CHECK_TASKS_DISABLED"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def claude_home(tmp_path, monkeypatch) -> Path:
    home = tmp_path / "claude-home"
    (home / "tasks").mkdir(parents=True)
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(home))
    return home


@pytest.fixture
def tasks_root(claude_home) -> Path:
    return claude_home / "tasks"


def write_task(tasks_root: Path, list_id: str, task_id: str, subject: str, status: str) -> Path:
    list_dir = tasks_root / list_id
    list_dir.mkdir(parents=True, exist_ok=True)
    path = list_dir / f"{task_id}.json"
    path.write_text(
        json.dumps(
            {
                "id": task_id,
                "subject": subject,
                "description": f"Details for {subject}",
                "activeForm": subject,
                "status": status,
                "blocks": [],
                "blockedBy": [],
            }
        )
    )
    return path


def write_settings(path: Path, settings: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2))
    return path


def write_transcript(path: Path, titles: list[str]) -> Path:
    lines = [
        json.dumps({"type": "user", "message": {"role": "user", "content": "hello"}}),
    ]
    for title in titles:
        lines.append(json.dumps({"type": "custom-title", "customTitle": title, "sessionId": "s1"}))
        lines.append(json.dumps({"type": "assistant", "message": {"content": "ok"}}))
    path.write_text("\n".join(lines) + "\n")
    return path


class StaticSource:
    """Config source returning a fixed config (None = not defined)."""

    def __init__(self, config: CheckTasksConfig | None, name: str = "static"):
        self.config = config
        self.name = name
        self.calls = 0

    def load(self, cwd: str) -> CheckTasksConfig | None:
        self.calls += 1
        return self.config
