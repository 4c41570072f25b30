import threading

import pytest

from kltekit.msg_q import (
    MessageQueue,
    MsgQueueError,
    MsgQueueStatus,
    QueueUnblockedError,
)


def test_raised_status_codes_match_documented_values():
    q = MessageQueue()
    with pytest.raises(MsgQueueError) as param_info:
        q.send(None)
    assert int(param_info.value.status) == -2
    q.unblock()
    with pytest.raises(QueueUnblockedError) as unblocked_info:
        q.receive()
    assert int(unblocked_info.value.status) == -4
    q.close()
    with pytest.raises(MsgQueueError) as handle_info:
        q.send("more")
    assert int(handle_info.value.status) == -3


def test_messages_come_out_in_send_order():
    q = MessageQueue()
    for msg in ("a", "b", "c"):
        q.send(msg)
    assert [q.receive() for _ in range(3)] == ["a", "b", "c"]


def test_send_none_is_invalid_parameter():
    q = MessageQueue()
    with pytest.raises(MsgQueueError) as info:
        q.send(None)
    assert info.value.status == MsgQueueStatus.INVALID_PARAMETER


def test_receive_blocks_until_message_sent():
    q = MessageQueue()
    sender = threading.Timer(0.1, q.send, args=("hello",))
    sender.start()
    received = q.receive()
    sender.join(5)
    assert received == "hello"


def test_unblock_wakes_waiter_with_error():
    q = MessageQueue()
    unblocker = threading.Timer(0.1, q.unblock)
    unblocker.start()
    with pytest.raises(QueueUnblockedError) as info:
        q.receive()
    unblocker.join(5)
    assert info.value.status == MsgQueueStatus.UNAVAILABLE_RESOURCE


def test_unblock_twice_raises():
    q = MessageQueue()
    q.unblock()
    with pytest.raises(QueueUnblockedError):
        q.unblock()


def test_send_and_receive_after_unblock_raise():
    q = MessageQueue()
    q.send("pending")
    q.unblock()
    with pytest.raises(QueueUnblockedError):
        q.send("late")
    with pytest.raises(QueueUnblockedError):
        q.receive()


def test_flush_calls_dealloc_and_empties_queue():
    q = MessageQueue()
    freed = []
    q.send("x", freed.append)
    q.send("y")
    q.send("z", freed.append)
    q.flush()
    assert sorted(freed) == ["x", "z"]
    q.send("after")
    assert q.receive() == "after"


def test_received_message_is_not_deallocated():
    q = MessageQueue()
    freed = []
    q.send("keep", freed.append)
    assert q.receive() == "keep"
    q.flush()
    assert freed == []


def test_close_flushes_and_invalidates():
    q = MessageQueue()
    freed = []
    q.send("left", freed.append)
    q.close()
    assert freed == ["left"]
    with pytest.raises(MsgQueueError) as info:
        q.send("more")
    assert info.value.status == MsgQueueStatus.INVALID_HANDLE


def test_context_manager_closes_queue():
    freed = []
    with MessageQueue() as q:
        q.send("item", freed.append)
    assert freed == ["item"]
    with pytest.raises(MsgQueueError) as info:
        q.receive()
    assert info.value.status == MsgQueueStatus.INVALID_HANDLE


def test_many_producers_deliver_every_message():
    q = MessageQueue()
    producers = [
        threading.Thread(target=lambda n=n: [q.send((n, i)) for i in range(20)])
        for n in range(4)
    ]
    for p in producers:
        p.start()
    received = [q.receive() for _ in range(80)]
    for p in producers:
        p.join(5)
    assert sorted(received) == sorted((n, i) for n in range(4) for i in range(20))
    for n in range(4):
        assert [i for m, i in received if m == n] == list(range(20))