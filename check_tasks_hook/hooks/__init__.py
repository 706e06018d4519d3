"""Hook entry points for the check-tasks Stop hook."""
