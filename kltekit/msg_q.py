"""A blocking first-in first-out message queue shared between threads."""

from __future__ import annotations

import enum
import logging
import threading
from typing import Any, Callable, Optional

from kltekit.linked_list import EmptyListError, LinkedList, LinkedListError

_log = logging.getLogger(__name__)

Dealloc = Callable[[Any], object]


class MsgQueueStatus(enum.IntEnum):
    """Result codes of message queue operations."""

    SUCCESS = 0
    FAILURE_GENERAL = -1
    INVALID_PARAMETER = -2
    INVALID_HANDLE = -3
    UNAVAILABLE_RESOURCE = -4
    INSUFFICIENT_BUFFER = -5


class MsgQueueError(Exception):
    """A queue operation failed; ``status`` tells why."""

    def __init__(self, message: str, status: MsgQueueStatus = MsgQueueStatus.FAILURE_GENERAL):
        super().__init__(message)
        self.status = status


class QueueUnblockedError(MsgQueueError):
    """The queue has been unblocked and no longer carries messages."""

    def __init__(self, message: str = "message queue has been unblocked"):
        super().__init__(message, MsgQueueStatus.UNAVAILABLE_RESOURCE)


def _from_list_error(exc: LinkedListError) -> MsgQueueError:
    try:
        status = MsgQueueStatus(int(exc.status))
    except ValueError:
        status = MsgQueueStatus.FAILURE_GENERAL
    return MsgQueueError(str(exc), status)


class MessageQueue:
    """Queue whose ``receive`` blocks until a message arrives or the queue is unblocked.

    Messages come out in the order they were sent. Once ``unblock`` has been
    called every waiter wakes up and the queue refuses further sends and
    receives until it is closed.
    """

    def __init__(self) -> None:
        self._list = LinkedList()
        self._cond = threading.Condition(threading.Lock())
        self._unblocked = False
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise MsgQueueError("message queue is closed", MsgQueueStatus.INVALID_HANDLE)

    def send(self, msg: Any, dealloc: Optional[Dealloc] = None) -> None:
        """Put ``msg`` on the queue; ``dealloc`` is called on it if it is flushed."""
        self._check_open()
        if msg is None:
            raise MsgQueueError("msg must not be None", MsgQueueStatus.INVALID_PARAMETER)
        with self._cond:
            _log.debug("Sending message %r", msg)
            if self._unblocked:
                _log.error("Message queue has been unblocked.")
                raise QueueUnblockedError()
            try:
                self._list.add(msg, dealloc)
            except LinkedListError as exc:
                raise _from_list_error(exc) from exc
            finally:
                self._cond.notify()
        _log.debug("Finished sending message %r", msg)

    def receive(self) -> Any:
        """Wait for and return the oldest message."""
        self._check_open()
        _log.debug("Waiting on message")
        with self._cond:
            if self._unblocked:
                _log.error("Message queue has been unblocked.")
                raise QueueUnblockedError()
            while self._list.is_empty() and not self._unblocked:
                self._cond.wait()
            try:
                msg = self._list.remove()
            except EmptyListError as exc:
                raise QueueUnblockedError() from exc
            except LinkedListError as exc:
                raise _from_list_error(exc) from exc
        _log.debug("Received message %r", msg)
        return msg

    def flush(self) -> None:
        """Drop every queued message, calling each one's dealloc."""
        self._check_open()
        _log.debug("Flushing Message Queue")
        with self._cond:
            self._list.flush()
        _log.debug("Message Queue flushed")

    def unblock(self) -> None:
        """Stop the queue and wake every waiter."""
        self._check_open()
        with self._cond:
            if self._unblocked:
                _log.error("Message queue has been unblocked.")
                raise QueueUnblockedError()
            _log.debug("Unblocking Message Queue")
            self._unblocked = True
            self._cond.notify_all()
        _log.debug("Message Queue unblocked")

    def close(self) -> None:
        """Release the queue, flushing any messages left in it."""
        if self._closed:
            return
        with self._cond:
            self._list.flush()
            self._unblocked = False
            self._closed = True

    def __enter__(self) -> "MessageQueue":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()