"""Run a cleanup callable when the process exits or is asked to stop.

One callable is shared by all three termination paths:
  - normal interpreter exit (atexit)
  - SIGINT
  - SIGTERM

Signal handlers run the cleanup, then hand the signal to whatever handler
was installed before, so the host keeps its own termination behaviour:
a Python handler is called, SIG_DFL is restored and the signal re-raised,
SIG_IGN leaves the process running.

Usage::

    hooks = register_cleanup(cleanup)
    # ...
    unregister_cleanup(hooks)
"""

import atexit
import logging
import os
import signal
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

log = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@dataclass
class CleanupHooks:
    """Everything installed for one cleanup callable."""

    cleanup: Callable[[], None]
    # (signum, our handler, handler it replaced)
    signals: List[Tuple[int, Callable, object]] = field(default_factory=list)


def _chain(previous, signum, frame) -> None:
    """Give the signal to the handler that was installed before ours."""
    if callable(previous):
        previous(signum, frame)
    elif previous == signal.SIG_DFL:
        signal.signal(signum, signal.SIG_DFL)
        os.kill(os.getpid(), signum)


def _make_handler(cleanup: Callable[[], None], previous) -> Callable:
    def _on_signal(signum, frame):
        cleanup()
        _chain(previous, signum, frame)
    return _on_signal


def register_cleanup(cleanup: Callable[[], None]) -> CleanupHooks:
    """Install *cleanup* for exit, SIGINT and SIGTERM.

    Signal handlers can only be set from the main thread. When that fails
    the exit hook is still installed.
    """
    hooks = CleanupHooks(cleanup=cleanup)
    atexit.register(cleanup)

    for signum in TERMINATION_SIGNALS:
        try:
            previous = signal.getsignal(signum)
            handler = _make_handler(cleanup, previous)
            signal.signal(signum, handler)
        except (ValueError, OSError) as e:
            log.debug("Could not install %s handler: %s", signal.Signals(signum).name, e)
            continue
        hooks.signals.append((signum, handler, previous))

    return hooks


def unregister_cleanup(hooks: CleanupHooks) -> None:
    """Undo register_cleanup(). Safe to call more than once.

    A signal handler is only restored if ours is still the active one;
    if something was stacked on top since, it is left in place.
    """
    atexit.unregister(hooks.cleanup)

    while hooks.signals:
        signum, handler, previous = hooks.signals.pop()
        try:
            if signal.getsignal(signum) is handler:
                signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        except (ValueError, OSError) as e:
            log.debug("Could not restore %s handler: %s", signal.Signals(signum).name, e)
