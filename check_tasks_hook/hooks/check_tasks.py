#!/usr/bin/env python3
"""
check-tasks: Claude Code Stop hook.

Blocks the agent from stopping while the session's task list still has
pending or in-progress tasks.

Usage:
    check-tasks run       Execute the hook (called by Claude Code on Stop)
    check-tasks status    Show configuration and the task lists for a project

Registered in settings.json as:
    {"hooks": {"Stop": [{"hooks": [{"type": "command", "command": "check-tasks run", "timeout": 120}]}]}}

Exit codes:
    0: Always for `run`. The decision is in the JSON printed on stdout;
       stderr carries logs only.
"""

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

# --- Path Setup ---
HOOK_DIR = Path(__file__).parent  # <plugin>/hooks
PLUGIN_ROOT = HOOK_DIR.parent  # <plugin> (the check_tasks_hook package)
CHECKOUT_ROOT = PLUGIN_ROOT.parent

# Allow running as `python check_tasks_hook/hooks/check_tasks.py` from a checkout
if str(CHECKOUT_ROOT) not in sys.path:
    sys.path.insert(0, str(CHECKOUT_ROOT))

from check_tasks_hook.hooks.schemas import ClaudeStopHookOutput, HookInput  # noqa: E402
from check_tasks_hook.lib.config import (  # noqa: E402
    ENV_TASK_LIST_ID,
    CheckTasksConfig,
    GlobalSettingsSource,
    ProjectSettingsSource,
    config_from_settings,
    read_settings,
    resolve_config_with_source,
)
from check_tasks_hook.lib.decision import StopDecision  # noqa: E402
from check_tasks_hook.lib.engine import DecisionEngine  # noqa: E402
from check_tasks_hook.lib.project_ids import get_project_identifiers  # noqa: E402
from check_tasks_hook.lib.task_model import TaskStatus  # noqa: E402

LOG_LEVEL_ENV = "CHECK_TASKS_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Substrings identifying this hook's command inside settings.json
HOOK_COMMAND_MARKERS = ("check-tasks", "check_tasks", "hook-checktasks")

STATUS_LIST_LIMIT = 10

logger = logging.getLogger("check_tasks")


def configure_logging() -> None:
    """Send logs to stderr; stdout is reserved for the hook decision."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


# --- Hook ---


def read_hook_input(stream: TextIO | None) -> HookInput | None:
    """Read the Stop payload. Missing, empty or malformed input reads as None."""
    if stream is None:
        return None
    try:
        if stream.isatty():
            return None
        data = stream.read()
    except (OSError, ValueError) as e:
        logger.debug("Failed to read stdin: %s", e)
        return None
    if not data.strip():
        return None
    try:
        return HookInput.from_raw(json.loads(data))
    except json.JSONDecodeError as e:
        logger.debug("Ignoring malformed hook input: %s", e)
        return None


def decide(hook_input: HookInput | None, engine: DecisionEngine | None = None) -> StopDecision:
    """Evaluate the Stop event, failing open on any internal error."""
    transcript_path = hook_input.transcript_path if hook_input else None
    try:
        # getcwd raises if the process directory was removed underneath us
        cwd = (hook_input.cwd if hook_input else None) or os.getcwd()
        engine = engine or DecisionEngine()
        return engine.evaluate(cwd, transcript_path)
    except Exception:
        logger.exception("check-tasks failed; allowing stop")
        return StopDecision.approve("internal_error")


def to_claude_output(decision: StopDecision) -> ClaudeStopHookOutput:
    """Format for Claude Code."""
    return ClaudeStopHookOutput.model_validate(decision.to_json())


def run_hook(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    engine: DecisionEngine | None = None,
) -> int:
    """Read the event, decide, print exactly one JSON object. Always returns 0."""
    hook_input = read_hook_input(sys.stdin if stdin is None else stdin)
    decision = decide(hook_input, engine)
    logger.debug("Decision: %s %s", decision.verdict.value, decision.metadata)

    out = sys.stdout if stdout is None else stdout
    print(to_claude_output(decision).model_dump_json(exclude_none=True), file=out)
    return 0


# --- Status ---


def hook_registered(settings: dict[str, Any]) -> bool:
    """True if settings.json registers this hook under hooks.Stop."""
    hooks = settings.get("hooks")
    if not isinstance(hooks, dict):
        return False
    groups = hooks.get("Stop")
    if not isinstance(groups, list):
        return False
    for group in groups:
        if not isinstance(group, dict):
            continue
        for hook in group.get("hooks") or []:
            command = hook.get("command") if isinstance(hook, dict) else None
            if isinstance(command, str) and any(m in command for m in HOOK_COMMAND_MARKERS):
                return True
    return False


def describe_config(config: CheckTasksConfig) -> str:
    task_list = config.task_list_id or "(project lists)"
    keywords = ", ".join(config.keywords) if config.keywords else "(none)"
    enabled = "" if config.enabled else ", disabled"
    return f"List: {task_list}, Keywords: {keywords}{enabled}"


def print_settings_status(label: str, path: Path, out: TextIO) -> None:
    if not path.exists():
        print(f"· {label}: no settings file ({path})", file=out)
        return
    settings = read_settings(path)
    installed = hook_registered(settings)
    mark = "✓" if installed else "✗"
    print(f"{mark} {label}: {'Installed' if installed else 'Not installed'} ({path})", file=out)
    config = config_from_settings(settings)
    if config is not None:
        print(f"    {describe_config(config)}", file=out)


def run_status(cwd: str, out: TextIO | None = None, engine: DecisionEngine | None = None) -> int:
    """Print where the hook is registered and what it would check for ``cwd``."""
    out = sys.stdout if out is None else out
    engine = engine or DecisionEngine()

    print("check-tasks status\n", file=out)
    print_settings_status("Global", GlobalSettingsSource().path(cwd), out)
    print_settings_status("Project", ProjectSettingsSource().path(cwd), out)

    config, source_name = resolve_config_with_source(cwd, engine.sources)
    print(file=out)
    print(f"Effective config (from {source_name or 'defaults'}):", file=out)
    print(f"  {describe_config(config)}", file=out)

    identifiers = get_project_identifiers(cwd)
    print(file=out)
    print(f"Project identifiers: {', '.join(identifiers) if identifiers else '(none)'}", file=out)

    project_lists = engine.project_task_lists(cwd)
    if project_lists:
        print(file=out)
        print("Task lists for this project:", file=out)
        for list_id in project_lists:
            tasks = engine.store.load_tasks(list_id)
            counts = {status: sum(1 for t in tasks if t.status is status) for status in TaskStatus}
            print(
                f"  - {list_id} ({counts[TaskStatus.PENDING]} pending, "
                f"{counts[TaskStatus.IN_PROGRESS]} in progress, "
                f"{counts[TaskStatus.COMPLETED]} completed)",
                file=out,
            )
    else:
        all_lists = engine.store.list_task_lists()
        if all_lists:
            print(file=out)
            print("All task lists (none match this project):", file=out)
            for list_id in all_lists[:STATUS_LIST_LIMIT]:
                print(f"  - {list_id}", file=out)
            if len(all_lists) > STATUS_LIST_LIMIT:
                print(f"  ... and {len(all_lists) - STATUS_LIST_LIMIT} more", file=out)

    env_list = os.environ.get(ENV_TASK_LIST_ID)
    if env_list:
        print(file=out)
        print("Environment (legacy):", file=out)
        print(f"  {ENV_TASK_LIST_ID}: {env_list}", file=out)

    return 0


# --- Main Entry Point ---


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check-tasks",
        description="Claude Code Stop hook: keep working while tasks remain open.",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("run", help="Execute the hook (called by Claude Code)")
    status = subparsers.add_parser("status", help="Show hook configuration and task lists")
    status.add_argument("--cwd", default=None, help="Project directory (default: current directory)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "run":
        return run_hook()
    if args.command == "status":
        return run_status(args.cwd or os.getcwd())

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
