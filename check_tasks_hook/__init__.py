"""check-tasks: Claude Code Stop hook plugin."""
