"""
Waiting queue: FIFO, first-fit by arrival.
"""
from datetime import datetime, timezone

from emerald.engine.waitlist import WaitingQueue
from emerald.models.floor import QueueEntry

NOW = datetime(2026, 10, 17, 19, 0, tzinfo=timezone.utc)


def _entry(order_id, people):
    return QueueEntry(party_name=order_id, people=people, order_id=order_id, enqueued_at=NOW)


def test_enqueue_returns_position():
    queue = WaitingQueue()
    assert queue.enqueue(_entry("A", 4)) == 1
    assert queue.enqueue(_entry("B", 2)) == 2
    assert queue.position("B") == 2
    assert queue.position("missing") is None


def test_find_eligible_prefers_arrival_order_over_fit():
    queue = WaitingQueue()
    queue.enqueue(_entry("A", 6))
    queue.enqueue(_entry("B", 3))
    queue.enqueue(_entry("C", 4))
    # capacity 4: A does not fit, B arrived before C → B, even though C fills it
    assert queue.find_eligible(4).order_id == "B"


def test_find_eligible_none_when_nobody_fits():
    queue = WaitingQueue()
    queue.enqueue(_entry("A", 6))
    assert queue.find_eligible(4) is None


def test_remove_is_idempotent():
    queue = WaitingQueue()
    entry = _entry("A", 2)
    queue.enqueue(entry)
    assert queue.remove(entry) is True
    assert queue.remove(entry) is False
    assert len(queue) == 0
