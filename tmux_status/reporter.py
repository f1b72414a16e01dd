"""Activity status reporter for one working directory.

The reporter owns a single status file and moves it between labels as host
events arrive:

    message.part.updated, message.updated  -> busy (debounced)
    session.idle                           -> idle
    session.error                          -> error
    permission.asked                       -> permission
    permission.replied                     -> busy

Busy writes from message events are debounced: a write only happens when
more than 0.3s passed since the previous debounced write. Skipped writes
are dropped, not deferred. All other transitions are written immediately
and do not touch the debounce timestamp.

The file is written ``idle`` on creation and removed on process exit,
SIGINT or SIGTERM.

The host calls ``tmux_status`` once with its session context and gets back
its hooks mapping::

    hooks = tmux_status({"directory": "/src/app", "worktree": "/src/app"})
    hooks["event"]({"event": {"type": "session.idle"}})
"""

import logging
import time
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from tmux_status.lifecycle import CleanupHooks, register_cleanup, unregister_cleanup
from tmux_status.status_file import (
    STATUS_BUSY,
    STATUS_ERROR,
    STATUS_IDLE,
    STATUS_PERMISSION,
    remove_status,
    write_status,
)

log = logging.getLogger(__name__)

EVENT_MESSAGE_PART_UPDATED = "message.part.updated"
EVENT_MESSAGE_UPDATED = "message.updated"
EVENT_SESSION_IDLE = "session.idle"
EVENT_SESSION_ERROR = "session.error"
EVENT_PERMISSION_ASKED = "permission.asked"
EVENT_PERMISSION_REPLIED = "permission.replied"

# Events that only signal ongoing activity; writes for these are debounced.
BUSY_EVENTS = frozenset({EVENT_MESSAGE_PART_UPDATED, EVENT_MESSAGE_UPDATED})

# Events that always write their label.
EVENT_STATUS = {
    EVENT_SESSION_IDLE: STATUS_IDLE,
    EVENT_SESSION_ERROR: STATUS_ERROR,
    EVENT_PERMISSION_ASKED: STATUS_PERMISSION,
    EVENT_PERMISSION_REPLIED: STATUS_BUSY,
}

# Minimum gap between two debounced busy writes (seconds).
BUSY_DEBOUNCE_SECONDS = 0.3


def event_type(event: Any) -> Optional[str]:
    """Extract the ``type`` discriminator from a host event.

    Accepts a mapping, an object with a ``type`` attribute, or the hook
    payload ``{"event": <event>}``. Returns None when there is no string type.
    """
    if isinstance(event, Mapping):
        if "type" not in event and "event" in event:
            return event_type(event["event"])
        kind = event.get("type")
    else:
        kind = getattr(event, "type", None)
    return kind if isinstance(kind, str) else None


class StatusReporter:
    """Mirror a host session's activity into its directory's status file.

    The worktree path wins over the working directory when given, since the
    tmux side resolves panes by worktree root. With neither, the reporter is
    disabled and ignores everything.
    """

    def __init__(
        self,
        directory: Optional[str],
        worktree: Optional[str] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        install_hooks: bool = True,
    ):
        self.directory: Optional[str] = worktree or directory or None
        self._clock = clock
        self._last_busy_write: Optional[float] = None
        self._hooks: Optional[CleanupHooks] = None

        if not self.enabled:
            log.debug("No directory or worktree given, status reporting disabled")
            return

        write_status(self.directory, STATUS_IDLE)
        if install_hooks:
            self._hooks = register_cleanup(self.cleanup)

    @property
    def enabled(self) -> bool:
        return bool(self.directory)

    def handle_event(self, event: Any) -> None:
        """Apply one host event. Never raises, returns nothing."""
        if not self.enabled:
            return

        kind = event_type(event)
        if kind in BUSY_EVENTS:
            self._write_busy_debounced()
        elif kind in EVENT_STATUS:
            write_status(self.directory, EVENT_STATUS[kind])

    def _write_busy_debounced(self) -> None:
        now = self._clock()
        last = self._last_busy_write
        if last is not None and now - last <= BUSY_DEBOUNCE_SECONDS:
            return
        self._last_busy_write = now
        write_status(self.directory, STATUS_BUSY)

    def cleanup(self) -> None:
        """Remove the status file. Idempotent."""
        if self.enabled:
            remove_status(self.directory)

    def close(self) -> None:
        """Remove the status file and uninstall the exit/signal hooks."""
        self.cleanup()
        if self._hooks is not None:
            unregister_cleanup(self._hooks)
            self._hooks = None


def _context_value(context: Any, name: str) -> Optional[str]:
    if isinstance(context, Mapping):
        value = context.get(name)
    else:
        value = getattr(context, name, None)
    if value is None:
        return None
    return str(value)


def tmux_status(context: Any) -> Dict[str, Callable[[Any], None]]:
    """Host entry point: start reporting for the context's worktree (or directory)."""
    reporter = StatusReporter(
        _context_value(context, "directory"),
        _context_value(context, "worktree"),
    )
    return {"event": reporter.handle_event}
