"""Library modules for the check-tasks Stop hook."""
