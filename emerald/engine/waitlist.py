"""
Floor Service — Waiting queue

FIFO by arrival. A freed table goes to the earliest party that fits it, even
if a later party would fill it better.
"""
from collections import deque
from typing import Deque

from emerald.models.floor import QueueEntry


class WaitingQueue:
    def __init__(self) -> None:
        self._entries: Deque[QueueEntry] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def enqueue(self, entry: QueueEntry) -> int:
        """Append to the tail; returns the 1-based queue position."""
        self._entries.append(entry)
        return len(self._entries)

    def find_eligible(self, capacity: int) -> QueueEntry | None:
        for entry in self._entries:
            if entry.people <= capacity:
                return entry
        return None

    def remove(self, entry: QueueEntry) -> bool:
        """Idempotent: removing an entry that is already gone returns False."""
        try:
            self._entries.remove(entry)
        except ValueError:
            return False
        return True

    def position(self, order_id: str) -> int | None:
        for idx, entry in enumerate(self._entries, start=1):
            if entry.order_id == order_id:
                return idx
        return None

    def snapshot(self) -> list[QueueEntry]:
        return list(self._entries)
