"""Tests for signal handling utilities."""

import signal

from steelseries_screen._signal import interruptible


class TestInterruptible:
    """Tests for interruptible context manager."""

    def test_yields_active_flag(self) -> None:
        """Should yield an active RunFlag."""
        with interruptible() as flag:
            assert flag.active is True

    def test_signal_stops_flag(self) -> None:
        """SIGINT should stop the flag instead of raising."""
        with interruptible() as flag:
            signal.raise_signal(signal.SIGINT)
            assert flag.active is False

    def test_restores_handler(self) -> None:
        """The previous SIGINT handler should be restored on exit."""
        before = signal.getsignal(signal.SIGINT)
        with interruptible():
            assert signal.getsignal(signal.SIGINT) is not before
        assert signal.getsignal(signal.SIGINT) is before
