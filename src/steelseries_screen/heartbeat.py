"""Background keep-alive for GameSense sessions."""

import logging
import threading
from collections.abc import Callable

from steelseries_screen.constants import DEFAULT_HEARTBEAT_INTERVAL

logger = logging.getLogger(__name__)


class RunFlag:
    """Thread-safe "keep going" flag with interruptible waits.

    Written by the controlling thread, read by a worker loop.
    """

    __slots__ = ("_stopped",)

    def __init__(self) -> None:
        self._stopped = threading.Event()

    @property
    def active(self) -> bool:
        """Return True until stop() is called."""
        return not self._stopped.is_set()

    def stop(self) -> None:
        """Clear the flag."""
        self._stopped.set()

    def wait(self, timeout: float) -> bool:
        """Sleep for up to *timeout* seconds.

        Returns:
            True if the flag was cleared while (or before) waiting.
        """
        return self._stopped.wait(timeout)


class Heartbeat:
    """Periodically call *beat* on a daemon thread until stopped.

    Failures of a single beat are logged and otherwise ignored; GameSense
    only blanks the screen after ``DEVICE_TIMEOUT`` without contact, so the
    default interval leaves room for one lost beat.

    Example:
        heartbeat = Heartbeat(client.heartbeat)
        heartbeat.start()
        ...
        heartbeat.stop()
    """

    def __init__(
        self,
        beat: Callable[[], None],
        interval: float = DEFAULT_HEARTBEAT_INTERVAL,
        name: str = "gamesense-heartbeat",
    ) -> None:
        if interval <= 0:
            msg = f"Heartbeat interval must be positive, got {interval}"
            raise ValueError(msg)
        self._beat = beat
        self._interval = interval
        self._flag = RunFlag()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def active(self) -> bool:
        """Return True while the loop has not been told to stop."""
        return self._flag.active

    def start(self) -> None:
        """Start the background loop."""
        logger.debug("Starting heartbeat every %.1fs", self._interval)
        self._thread.start()

    def stop(self) -> None:
        """Ask the loop to stop; does not wait for it."""
        self._flag.stop()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the loop to exit after stop()."""
        if self._thread.is_alive():
            self._thread.join(timeout)

    def _run(self) -> None:
        while self._flag.active:
            try:
                self._beat()
            except Exception as e:
                logger.warning("Heartbeat failed: %s", e)
            if self._flag.wait(self._interval):
                break
        logger.debug("Heartbeat stopped")
