#!/usr/bin/env python3
"""
Path resolution for the check-tasks hook.

Everything is resolved at call time so that tests (and users) can redirect
the Claude home directory through the environment.

Environment variables:
- $CLAUDE_CONFIG_DIR: Claude home directory (defaults to ~/.claude)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"
TASKS_DIRNAME = "tasks"


def get_plugin_root() -> Path:
    """
    Get the root directory of the check-tasks plugin.

    This file is at <root>/lib/paths.py, so the root is 2 levels up.
    """
    return Path(__file__).resolve().parent.parent


def get_templates_dir() -> Path:
    """Get message templates directory (plugin_root/hooks/templates)."""
    return get_plugin_root() / "hooks" / "templates"


def get_claude_home() -> Path:
    """
    Get the Claude Code home directory.

    Uses CLAUDE_CONFIG_DIR if set (Claude Code honours the same variable),
    otherwise ~/.claude.

    Returns:
        Path: Claude home directory (may not exist)
    """
    config_dir = os.environ.get("CLAUDE_CONFIG_DIR")
    if config_dir:
        return Path(config_dir).expanduser()
    return Path.home() / ".claude"


def get_tasks_root() -> Path:
    """Get the task store root (<claude home>/tasks)."""
    return get_claude_home() / TASKS_DIRNAME


def get_global_settings_path() -> Path:
    """Get the user-global settings file (<claude home>/settings.json)."""
    return get_claude_home() / SETTINGS_FILENAME


def get_project_settings_path(project_dir: str | Path) -> Path:
    """Get the project settings file (<project>/.claude/settings.json)."""
    return Path(project_dir) / ".claude" / SETTINGS_FILENAME
