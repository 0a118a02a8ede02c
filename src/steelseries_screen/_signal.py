"""Stop long-running CLI commands on SIGINT/SIGTERM."""

import signal
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from steelseries_screen.heartbeat import RunFlag


@contextmanager
def interruptible() -> Iterator[RunFlag]:
    """Yield a RunFlag that is stopped by Ctrl+C or SIGTERM.

    Example:
        with interruptible() as flag:
            while flag.active:
                session.update()
                flag.wait(0.1)  # returns early on Ctrl+C
    """
    flag = RunFlag()

    def handler(signum: int, frame: object) -> None:
        flag.stop()

    old_sigint = signal.signal(signal.SIGINT, handler)
    old_sigterm = None
    if sys.platform != "win32":
        old_sigterm = signal.signal(signal.SIGTERM, handler)

    try:
        yield flag
    finally:
        signal.signal(signal.SIGINT, old_sigint)
        if old_sigterm is not None:
            signal.signal(signal.SIGTERM, old_sigterm)
