import errno
import threading

import pytest

from kltekit.timer import LocTimer, TimerState, start_timer


def test_callback_fires_with_timeout_result():
    calls = []
    fired = threading.Event()

    def callback(data, result):
        calls.append((data, result))
        fired.set()

    timer = start_timer(20, callback, "payload")
    assert fired.wait(5)
    assert timer.join(5)
    assert calls == [("payload", errno.ETIMEDOUT)]
    assert timer.state is TimerState.DONE


def test_stop_prevents_callback():
    calls = []
    timer = LocTimer(10_000, lambda d, r: calls.append(r)).start()
    timer.stop()
    assert timer.join(5)
    assert calls == []
    assert timer.state is TimerState.DONE


def test_stop_before_start_cancels():
    calls = []
    timer = LocTimer(10, lambda d, r: calls.append(r))
    timer.stop()
    assert timer.state is TimerState.ABORT
    timer.start()
    assert timer.join(5)
    assert calls == []
    assert timer.state is TimerState.ABORT


def test_new_timer_is_ready():
    timer = LocTimer(50, lambda d, r: None)
    assert timer.state is TimerState.READY


@pytest.mark.parametrize("msec", [0, -5])
def test_bad_delay_rejected(msec):
    with pytest.raises(ValueError):
        LocTimer(msec, lambda d, r: None)


def test_missing_callback_rejected():
    with pytest.raises(ValueError):
        start_timer(10, None)


def test_double_start_rejected():
    timer = start_timer(10_000, lambda d, r: None)
    with pytest.raises(RuntimeError):
        timer.start()
    timer.stop()
    assert timer.join(5)