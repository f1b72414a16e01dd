"""Report an agent's activity state to a tmux status line."""

from tmux_status.reporter import StatusReporter, tmux_status

__all__ = ["StatusReporter", "tmux_status"]
