"""Best-effort writes of per-directory status files.

A status file holds exactly one label (no trailing newline):

    idle        waiting for input
    busy        working
    error       the session failed
    permission  waiting for the user to approve a tool call

Writes are plain overwrites: no temp file, no rename, no locking. The
labels are a few bytes long, so a reader polling the file sees either the
old label or the new one.

Filesystem failures are dropped silently: a stale label on the status
line is preferable to disturbing the host process.
"""

from tmux_status.paths import get_status_dir, status_file

STATUS_IDLE = "idle"
STATUS_BUSY = "busy"
STATUS_ERROR = "error"
STATUS_PERMISSION = "permission"

STATUS_LABELS = frozenset({STATUS_IDLE, STATUS_BUSY, STATUS_ERROR, STATUS_PERMISSION})


def write_status(directory: str, status: str) -> None:
    """Write *status* as the whole content of *directory*'s status file.

    Creates the status directory on demand. Raises ValueError for a label
    outside the known set; every filesystem error is swallowed.
    """
    if status not in STATUS_LABELS:
        raise ValueError(f"Unknown status label: {status!r}")
    try:
        get_status_dir().mkdir(parents=True, exist_ok=True)
        status_file(directory).write_text(status, encoding="utf-8")
    except OSError:
        pass


def remove_status(directory: str) -> None:
    """Delete *directory*'s status file. Missing files are not an error."""
    try:
        status_file(directory).unlink()
    except OSError:
        pass
