"""One-shot timers that call back from a background thread when they expire."""

from __future__ import annotations

import enum
import errno
import logging
import threading
from typing import Any, Callable, Optional

_log = logging.getLogger(__name__)

TimerCallback = Callable[[Any, int], object]


class TimerState(enum.IntEnum):
    """Life cycle of a timer."""

    READY = 100
    WAITING = 101
    DONE = 102
    ABORT = 103


class LocTimer:
    """Calls ``callback(user_data, errno.ETIMEDOUT)`` once ``msec`` milliseconds pass.

    A timer stopped before it expires never calls back.
    """

    def __init__(self, msec: int, callback: TimerCallback, user_data: Any = None) -> None:
        if callback is None or not msec or msec < 0:
            _log.error("Error: Wrong parameters")
            raise ValueError("timer needs a callback and a positive delay")
        self.msec = int(msec)
        self.callback = callback
        self.user_data = user_data
        self._cond = threading.Condition()
        self._state = TimerState.READY
        self._thread = threading.Thread(target=self._run, name="loc-timer", daemon=True)
        self._started = False

    @property
    def state(self) -> TimerState:
        """The timer's current state."""
        with self._cond:
            return self._state

    def _run(self) -> None:
        _log.debug("Enter. Delay = %d", self.msec)
        timed_out = False
        cancelled = True
        with self._cond:
            if self._state is TimerState.READY:
                cancelled = False
                self._state = TimerState.WAITING
                stopped = self._cond.wait_for(
                    lambda: self._state is TimerState.ABORT, self.msec / 1000.0
                )
                timed_out = not stopped
                self._state = TimerState.DONE
        if cancelled:
            _log.debug("loc_timer cancelled")
        elif timed_out:
            _log.debug("loc_timer timed out")
            self.callback(self.user_data, errno.ETIMEDOUT)
        else:
            _log.debug("loc_timer stopped")

    def start(self) -> "LocTimer":
        """Start counting down in a background thread."""
        if self._started:
            raise RuntimeError("timer already started")
        self._started = True
        self._thread.start()
        return self

    def stop(self) -> None:
        """Cancel the timer if it has not yet expired."""
        with self._cond:
            if self._state in (TimerState.READY, TimerState.WAITING):
                self._state = TimerState.ABORT
                self._cond.notify_all()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the timer thread to finish; return whether it has."""
        if self._started:
            self._thread.join(timeout)
        return not self._thread.is_alive()


def start_timer(msec: int, callback: TimerCallback, user_data: Any = None) -> LocTimer:
    """Create a timer and start it; the returned timer can be stopped."""
    return LocTimer(msec, callback, user_data).start()