#!/usr/bin/env python3
"""
Configuration for the check-tasks hook.

The hook reads a ``checkTasksConfig`` record from, in priority order:

1. Project settings: <project>/.claude/settings.json
2. Global settings:  <claude home>/settings.json
3. Environment variables (legacy):
   - CLAUDE_CODE_TASK_LIST_ID: task list to check
   - CHECK_TASKS_KEYWORDS: comma-separated keywords (default: "dev")
   - CHECK_TASKS_DISABLED: "1" disables the hook

The first source that defines the record wins wholesale; tiers are never
merged. Sources are plain objects so the engine can be given any ordering.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from check_tasks_hook.lib.paths import get_global_settings_path, get_project_settings_path

logger = logging.getLogger(__name__)

CONFIG_KEY = "checkTasksConfig"
DEFAULT_KEYWORDS = ("dev",)

ENV_TASK_LIST_ID = "CLAUDE_CODE_TASK_LIST_ID"
ENV_KEYWORDS = "CHECK_TASKS_KEYWORDS"
ENV_DISABLED = "CHECK_TASKS_DISABLED"


def parse_keywords(raw: str) -> list[str]:
    """Split a comma-separated keyword string into normalized keywords."""
    return [k.strip().lower() for k in raw.split(",") if k.strip()]


class CheckTasksConfig(BaseModel):
    """The ``checkTasksConfig`` settings record.

    JSON field names are camelCase; Python attributes are snake_case.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    task_list_id: str | None = Field(default=None, alias="taskListId")
    keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_KEYWORDS))
    enabled: bool = True

    @field_validator("task_list_id", mode="before")
    @classmethod
    def _blank_list_id_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("keywords", mode="before")
    @classmethod
    def _default_keywords(cls, value: Any) -> Any:
        # An explicit null behaves like an absent key
        if value is None:
            return list(DEFAULT_KEYWORDS)
        return value

    @field_validator("keywords")
    @classmethod
    def _normalize_keywords(cls, value: list[str]) -> list[str]:
        return [k.strip().lower() for k in value if k.strip()]


class ConfigSource(Protocol):
    """A place a CheckTasksConfig may come from."""

    name: str

    def load(self, cwd: str) -> CheckTasksConfig | None:
        """Return the config this source defines, or None if it defines none."""
        ...


def read_settings(path: Path) -> dict[str, Any]:
    """Read a Claude settings.json file. Missing or invalid files read as {}."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.debug("Ignoring unreadable settings file %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def config_from_settings(settings: dict[str, Any]) -> CheckTasksConfig | None:
    """Extract checkTasksConfig from parsed settings, if it is defined and valid."""
    raw = settings.get(CONFIG_KEY)
    if not isinstance(raw, dict):
        return None
    try:
        return CheckTasksConfig.model_validate(raw)
    except ValidationError as e:
        logger.debug("Ignoring invalid %s: %s", CONFIG_KEY, e)
        return None


class ProjectSettingsSource:
    """<cwd>/.claude/settings.json"""

    name = "project"

    def path(self, cwd: str) -> Path:
        return get_project_settings_path(cwd)

    def load(self, cwd: str) -> CheckTasksConfig | None:
        return config_from_settings(read_settings(self.path(cwd)))


class GlobalSettingsSource:
    """<claude home>/settings.json"""

    name = "global"

    def path(self, cwd: str) -> Path:
        return get_global_settings_path()

    def load(self, cwd: str) -> CheckTasksConfig | None:
        return config_from_settings(read_settings(self.path(cwd)))


class EnvironmentSource:
    """Legacy environment variables. Always defines a config."""

    name = "environment"

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = environ

    def load(self, cwd: str) -> CheckTasksConfig | None:
        environ = self._environ if self._environ is not None else os.environ
        raw_keywords = environ.get(ENV_KEYWORDS)
        keywords = list(DEFAULT_KEYWORDS) if raw_keywords is None else parse_keywords(raw_keywords)
        return CheckTasksConfig(
            task_list_id=environ.get(ENV_TASK_LIST_ID) or None,
            keywords=keywords,
            enabled=environ.get(ENV_DISABLED) != "1",
        )


def default_sources() -> list[ConfigSource]:
    """Project settings, then global settings, then environment."""
    return [ProjectSettingsSource(), GlobalSettingsSource(), EnvironmentSource()]


def resolve_config_with_source(
    cwd: str, sources: Sequence[ConfigSource]
) -> tuple[CheckTasksConfig, str | None]:
    """Return the first defined config and the name of the source it came from.

    If no source defines one, the defaults apply and the source name is None.
    """
    for source in sources:
        config = source.load(cwd)
        if config is not None:
            return config, source.name
    return CheckTasksConfig(), None


def resolve_config(cwd: str, sources: Sequence[ConfigSource]) -> CheckTasksConfig:
    """Return the first config defined by ``sources`` (defaults if none)."""
    return resolve_config_with_source(cwd, sources)[0]
