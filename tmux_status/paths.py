"""Status directory and status file locations.

The status directory is resolved once per process from the environment:

    $XDG_DATA_HOME/tmux-worktree/status
    $HOME/.local/share/tmux-worktree/status   (XDG_DATA_HOME unset or empty)

Each working directory maps to ``<status dir>/<key>`` where the key is the
first 12 hex characters of the MD5 digest of the directory path's bytes.
The tmux side computes the same key from ``pane_current_path``.
"""

import hashlib
import os
from pathlib import Path
from typing import Optional

STATUS_SUBPATH = ("tmux-worktree", "status")
STATUS_KEY_LENGTH = 12

_status_dir: Optional[Path] = None


def _data_home() -> Path:
    """Return the XDG data home, falling back to ~/.local/share."""
    xdg = os.environ.get("XDG_DATA_HOME", "")
    if xdg:
        return Path(xdg)
    home = os.environ.get("HOME", "")
    base = Path(home) if home else Path.home()
    return base / ".local" / "share"


def get_status_dir() -> Path:
    """Return the process-wide status directory (resolved on first call)."""
    global _status_dir
    if _status_dir is None:
        _status_dir = _data_home().joinpath(*STATUS_SUBPATH).absolute()
    return _status_dir


def status_key(directory: str) -> str:
    """Hash a directory path into its status file name.

    Hashes the filesystem encoding of the path, so undecodable bytes
    (surrogate escapes from os.getcwd()) hash to the raw on-disk name.
    """
    digest = hashlib.md5(os.fsencode(directory), usedforsecurity=False)
    return digest.hexdigest()[:STATUS_KEY_LENGTH]


def status_file(directory: str) -> Path:
    return get_status_dir() / status_key(directory)


def reset() -> None:
    """Forget the cached status directory (for tests)."""
    global _status_dir
    _status_dir = None
